from pathlib import Path

import pytest

from kamisado.infra.config.adapter import ConfigAdapter
from kamisado.libs.crypto.cipher import Kamisado
from kamisado.schemas import CipherConfig


@pytest.fixture
def sample_config(tmp_path) -> dict:
    return {
        "general": {
            "cipher": {
                "hash_name": " SHA512 ",
                "text_encoding": "utf-16-le",
            },
            "debug": {
                "log_level": "DEBUG",
                "log_dir": str(tmp_path / "logs"),
            },
        },
    }


def test_get_config_returns_copy_of_mapping(sample_config):
    adapter = ConfigAdapter(sample_config)
    assert adapter.get_config() == sample_config
    assert adapter.get_config() is not sample_config


def test_get_cipher_config(sample_config):
    cfg = ConfigAdapter(sample_config).get_cipher_config()
    assert cfg == CipherConfig(hash_name="sha512", text_encoding="utf-16-le")


@pytest.mark.parametrize(
    "raw",
    [{}, {"general": None}, {"general": {}}, {"general": {"cipher": None}}],
)
def test_get_cipher_config_defaults(raw):
    assert ConfigAdapter(raw).get_cipher_config() == CipherConfig()


@pytest.mark.parametrize("bad", [123, "", "   ", None])
def test_get_cipher_config_rejects_bad_values(bad):
    adapter = ConfigAdapter({"general": {"cipher": {"hash_name": bad}}})
    with pytest.raises(ValueError):
        adapter.get_cipher_config()


def test_cipher_config_drives_cipher(sample_config):
    cfg = ConfigAdapter(sample_config).get_cipher_config()
    configured = Kamisado.new("key", "?", cfg)
    explicit = Kamisado.new(
        "key".encode("utf-16-le"), b"?", CipherConfig(hash_name="sha512")
    )
    assert configured.initial_masks == explicit.initial_masks


def test_log_settings(sample_config, tmp_path):
    adapter = ConfigAdapter(sample_config)
    assert adapter.get_log_level() == "DEBUG"
    assert adapter.get_log_dir() == (tmp_path / "logs").resolve()


def test_log_settings_defaults():
    adapter = ConfigAdapter({})
    assert adapter.get_log_level() == "INFO"
    assert adapter.get_log_dir() == Path("./logs").expanduser().resolve()

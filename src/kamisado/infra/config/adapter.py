from __future__ import annotations

from pathlib import Path
from typing import Any

from kamisado.schemas import CipherConfig


class ConfigAdapter:
    """High-level accessor for the loaded settings mapping.

    Only the ``general`` block is consulted; values missing from it fall back
    to the built-in defaults.

    Args:
        config (dict[str, Any]): Fully loaded configuration mapping.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self._config: dict[str, Any] = dict(config)

    def get_config(self) -> dict[str, Any]:
        """Return the full raw configuration mapping."""
        return self._config

    def get_cipher_config(self) -> CipherConfig:
        """Build a CipherConfig from ``general.cipher``.

        Returns:
            CipherConfig: Resolved cipher configuration.

        Raises:
            ValueError: If a configured value has the wrong type.
        """
        cipher_cfg = self._gen_cfg().get("cipher") or {}
        defaults = CipherConfig()

        hash_name = cipher_cfg.get("hash_name", defaults.hash_name)
        text_encoding = cipher_cfg.get("text_encoding", defaults.text_encoding)
        for key, val in (("hash_name", hash_name), ("text_encoding", text_encoding)):
            if not isinstance(val, str) or not val.strip():
                raise ValueError(f"cipher.{key} must be a non-empty string")

        return CipherConfig(
            hash_name=hash_name.strip().lower(),
            text_encoding=text_encoding.strip(),
        )

    def get_log_level(self) -> str:
        """Return the configured logging level, ``"INFO"`` if missing."""
        debug_cfg = self._gen_cfg().get("debug") or {}
        return debug_cfg.get("log_level") or "INFO"

    def get_log_dir(self) -> Path:
        """Return the absolute directory for log files."""
        debug_cfg = self._gen_cfg().get("debug") or {}
        log_dir = debug_cfg.get("log_dir") or "./logs"
        return Path(log_dir).expanduser().resolve()

    def _gen_cfg(self) -> dict[str, Any]:
        general = self._config.get("general")
        return general if isinstance(general, dict) else {}

from __future__ import annotations

import pytest
from Crypto.Hash import SHA256 as RefSHA256
from Crypto.Hash import SHA512 as RefSHA512

from kamisado.libs.crypto.cipher._components import (
    SBOX,
    BasicMaskSelector,
    CipherStateManager,
    HashKeyGenerator,
    SBoxMaskUpdater,
)

# ===========================================================
# Key schedule
# ===========================================================


@pytest.mark.parametrize(
    "key",
    [b"\x00", b"StrongKamisadoKey", b"\x01\x02\x03", b"k" * 1000],
)
def test_key_generator_matches_sha256_prefix(key):
    gen = HashKeyGenerator()
    assert gen.generate_key(key, 8) == RefSHA256.new(key).digest()[:8]


def test_key_generator_is_deterministic():
    gen = HashKeyGenerator()
    assert gen.generate_key(b"TestKey", 8) == gen.generate_key(b"TestKey", 8)
    assert gen.generate_key(b"TestKey", 8) != gen.generate_key(b"TestKeY", 8)


def test_key_generator_pads_short_digest_with_zeros():
    gen = HashKeyGenerator()
    out = gen.generate_key(b"abc", 40)
    assert out == RefSHA256.new(b"abc").digest() + b"\x00" * 8


def test_key_generator_other_algorithm():
    gen = HashKeyGenerator("sha512")
    assert gen.algorithm == "sha512"
    assert gen.generate_key(b"abc", 8) == RefSHA512.new(b"abc").digest()[:8]


def test_key_generator_rejects_unknown_algorithm():
    with pytest.raises(ValueError):
        HashKeyGenerator("md-nothing")


# ===========================================================
# Mask selection
# ===========================================================


@pytest.mark.parametrize(
    "color, expected",
    [(0x00, 0), (0x07, 7), (0x08, 0), (0x3F, 7), (0xAA, 2), (0xFF, 7)],
)
def test_mask_selector_uses_low_three_bits(color, expected):
    assert BasicMaskSelector().select_index(color) == expected


def test_mask_selector_is_total():
    sel = BasicMaskSelector()
    assert {sel.select_index(c) for c in range(256)} == set(range(8))


# ===========================================================
# Mask update
# ===========================================================


def test_sbox_is_32_entries():
    assert len(SBOX) == 32
    assert SBOX[0] == 0x63
    assert SBOX[31] == 0xC0


@pytest.mark.parametrize(
    "mask, index, expected",
    [
        (0x00, 0, 0xC6),  # S=0x63, rotl -> 0xC6
        (0x04, 3, 0xE6),  # S=0xF2, rotl -> 0xE5, ^3
        (0x06, 6, 0xD8),  # S=0x6F, rotl -> 0xDE, ^6
        (0x1F, 7, 0x86),  # S=0xC0, rotl -> 0x81, ^7
    ],
)
def test_mask_updater_known_values(mask, index, expected):
    assert SBoxMaskUpdater().update_mask(mask, index) == expected


def test_mask_updater_ignores_high_bits():
    upd = SBoxMaskUpdater()
    for mask in range(256):
        assert upd.update_mask(mask, 0) == upd.update_mask(mask & 0x1F, 0)


def test_mask_updater_output_is_a_byte():
    upd = SBoxMaskUpdater()
    for mask in range(256):
        for index in range(8):
            assert 0 <= upd.update_mask(mask, index) <= 0xFF


# ===========================================================
# Feedback state
# ===========================================================


def test_state_manager_reset_and_update():
    st = CipherStateManager()
    st.reset_state(0x3F)
    assert st.get_current_color() == 0x3F

    st.update_state(0x12)
    assert st.get_current_color() == 0x12

    st.reset_state(0x3F)
    assert st.get_current_color() == 0x3F


def test_state_manager_keeps_byte_range():
    st = CipherStateManager()
    st.reset_state(0x1FF)
    assert st.get_current_color() == 0xFF
    st.update_state(0x100)
    assert st.get_current_color() == 0x00

from __future__ import annotations

from kamisado.libs.crypto.hash_utils import digest_bytes

MASK_COUNT = 8
INDEX_MASK = 0x07  #: low three bits of the feedback byte select a slot
SBOX_INDEX_MASK = 0x1F  #: masks are reduced to 5 bits before substitution

# First 32 entries of the AES S-box.
# fmt: off
SBOX = (
    0x63, 0x7C, 0x77, 0x7B, 0xF2, 0x6B, 0x6F, 0xC5,
    0x30, 0x01, 0x67, 0x2B, 0xFE, 0xD7, 0xAB, 0x76,
    0xCA, 0x82, 0xC9, 0x7D, 0xFA, 0x59, 0x47, 0xF0,
    0xAD, 0xD4, 0xA2, 0xAF, 0x9C, 0xA4, 0x72, 0xC0,
)
# fmt: on

assert len(SBOX) == SBOX_INDEX_MASK + 1


def _rotl8(x: int, n: int = 1) -> int:
    """Left-rotate an 8-bit value."""
    return ((x << n) & 0xFF) | (x >> (8 - n))


class HashKeyGenerator:
    """Key schedule: the leading bytes of a hash of the key.

    Digests shorter than the requested length are right-padded with zero
    bytes. The default SHA-256 digest (32 bytes) always covers an 8-byte
    mask table.
    """

    __slots__ = ("_algorithm",)

    def __init__(self, algorithm: str = "sha256") -> None:
        """
        Args:
            algorithm: Hash algorithm name understood by :mod:`hashlib`.

        Raises:
            ValueError: If the algorithm is not available.
        """
        # fail early on unknown names rather than on first use
        digest_bytes(b"", algorithm)
        self._algorithm = algorithm

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def generate_key(self, key: bytes, length: int) -> bytes:
        digest = digest_bytes(key, self._algorithm)
        return digest[:length].ljust(length, b"\x00")


class BasicMaskSelector:
    """Selects the mask slot from the three low bits of the feedback byte."""

    __slots__ = ()

    def select_index(self, current_color: int) -> int:
        return current_color & INDEX_MASK


class SBoxMaskUpdater:
    """Substitute, rotate left by one bit, then mix in the slot index."""

    __slots__ = ()

    def update_mask(self, mask: int, index: int) -> int:
        updated = SBOX[mask & SBOX_INDEX_MASK]
        return _rotl8(updated) ^ index


class CipherStateManager:
    """Single-byte feedback register."""

    __slots__ = ("_current_color",)

    def __init__(self) -> None:
        self._current_color = 0

    def reset_state(self, initial_color: int) -> None:
        self._current_color = initial_color & 0xFF

    def update_state(self, processed_byte: int) -> None:
        self._current_color = processed_byte & 0xFF

    def get_current_color(self) -> int:
        return self._current_color

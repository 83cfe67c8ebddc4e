from __future__ import annotations

import logging
from types import TracebackType
from typing import Self

from kamisado.libs.crypto.errors import InvalidInput
from kamisado.schemas import CipherConfig

from ._components import (
    MASK_COUNT,
    BasicMaskSelector,
    CipherStateManager,
    HashKeyGenerator,
    SBoxMaskUpdater,
)
from ._protocols import (
    KeyGeneratorProtocol,
    MaskSelectorProtocol,
    MaskUpdaterProtocol,
    StateManagerProtocol,
)

logger = logging.getLogger(__name__)

mask_count = MASK_COUNT

BytesLike = bytes | bytearray | memoryview | str


def _as_bytes(value: BytesLike | None, name: str, encoding: str) -> bytes:
    """Coerce a key or IV argument to non-empty ``bytes``.

    Raises:
        InvalidInput: If the value is missing, empty or of an unsupported type.
    """
    if value is None:
        raise InvalidInput(f"Invalid {name}: missing")
    if isinstance(value, str):
        value = value.encode(encoding)
    elif isinstance(value, (bytes, bytearray, memoryview)):
        value = bytes(value)
    else:
        raise InvalidInput(f"Invalid {name}: unsupported type {type(value).__name__}")
    if not value:
        raise InvalidInput(f"Invalid {name}: empty")
    return value


class KamisadoCipher:
    """Feedback-driven byte stream cipher.

    Every byte is XORed with one of eight mask bytes. The slot is chosen by
    the low bits of the previous ciphertext byte (the "current color", seeded
    from the first IV byte) and the used mask is replaced right after through
    a substitute-rotate-mix step. Because the feedback always comes from the
    ciphertext, decryption walks through exactly the same mask states as
    encryption did.

    Both :meth:`encrypt` and :meth:`decrypt` reset the state first, so
    successive calls on one instance are independent of each other.

    Instances are not thread-safe.
    """

    def __init__(
        self,
        key: bytes,
        iv: bytes,
        key_generator: KeyGeneratorProtocol,
        mask_selector: MaskSelectorProtocol,
        mask_updater: MaskUpdaterProtocol,
        state_manager: StateManagerProtocol,
    ) -> None:
        """Derive the initial mask table and reset the cipher.

        Prefer :func:`new`, which validates and coerces its arguments and
        supplies the default components.

        Args:
            key: Secret key, at least one byte.
            iv: Initialization value, at least one byte. Only ``iv[0]`` is
                used as the feedback seed.
            key_generator: Key schedule.
            mask_selector: Feedback byte to mask slot mapping.
            mask_updater: Mask replacement rule.
            state_manager: Feedback byte holder.

        Raises:
            InvalidInput: If ``key`` or ``iv`` is empty.
        """
        if not key:
            raise InvalidInput("Invalid key: empty")
        if not iv:
            raise InvalidInput("Invalid IV: empty")

        self._key_generator = key_generator
        self._mask_selector = mask_selector
        self._mask_updater = mask_updater
        self._state_manager = state_manager
        self._iv = bytes(iv)

        initial = key_generator.generate_key(bytes(key), MASK_COUNT)
        if len(initial) != MASK_COUNT:
            raise ValueError(
                f"Key generator returned {len(initial)} bytes, expected {MASK_COUNT}"
            )
        self._initial_masks = bytearray(initial)
        self._current_masks = bytearray(self._initial_masks)
        self._closed = False
        self.reset()

    @property
    def iv(self) -> bytes:
        return self._iv

    @property
    def initial_masks(self) -> bytes:
        """Copy of the mask table derived from the key."""
        return bytes(self._initial_masks)

    @property
    def masks(self) -> bytes:
        """Copy of the working mask table."""
        return bytes(self._current_masks)

    @property
    def current_color(self) -> int:
        return self._state_manager.get_current_color()

    @property
    def closed(self) -> bool:
        return self._closed

    def reset(self) -> None:
        """Re-seed the feedback byte and restore the initial mask table."""
        self._check_open()
        self._state_manager.reset_state(self._iv[0])
        self._current_masks[:] = self._initial_masks

    def encrypt(self, data: bytes) -> bytes:
        """Encrypt data.

        Args:
            data: Plaintext bytes of any length.

        Returns:
            Ciphertext bytes of the same length.
        """
        return self._process(data, encrypting=True)

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt data.

        Args:
            data: Ciphertext bytes of any length.

        Returns:
            Plaintext bytes of the same length.
        """
        return self._process(data, encrypting=False)

    def close(self) -> None:
        """Zero both mask tables. Further use raises :class:`ValueError`."""
        if self._closed:
            return
        self._initial_masks[:] = bytes(MASK_COUNT)
        self._current_masks[:] = bytes(MASK_COUNT)
        self._closed = True
        logger.debug("Kamisado cipher closed, mask tables cleared")

    def __enter__(self) -> Self:
        self._check_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _process(self, data: bytes, encrypting: bool) -> bytes:
        """Run one full pass over ``data`` in the given direction."""
        self.reset()
        if not data:
            return b""

        masks = self._current_masks
        select_index = self._mask_selector.select_index
        update_mask = self._mask_updater.update_mask
        state = self._state_manager

        out = bytearray(len(data))
        for pos, ch in enumerate(data):
            index = select_index(state.get_current_color())
            mask = masks[index]
            res = ch ^ mask
            out[pos] = res
            masks[index] = update_mask(mask, index)
            # feedback always comes from the ciphertext side
            state.update_state(res if encrypting else ch)
        return bytes(out)

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("Operation on closed cipher")


def new(
    key: BytesLike,
    iv: BytesLike,
    cfg: CipherConfig | None = None,
    *,
    key_generator: KeyGeneratorProtocol | None = None,
    mask_selector: MaskSelectorProtocol | None = None,
    mask_updater: MaskUpdaterProtocol | None = None,
    state_manager: StateManagerProtocol | None = None,
) -> KamisadoCipher:
    """Create a Kamisado cipher object.

    Args:
        key: Secret key of any non-zero length. ``str`` keys are encoded with
            ``cfg.text_encoding``.
        iv: Initialization value of any non-zero length; only the first byte
            is used. ``str`` values are encoded like the key.
        cfg: Optional cipher configuration. Defaults to :class:`CipherConfig`.
        key_generator: Optional key schedule override. Defaults to a
            :class:`HashKeyGenerator` using ``cfg.hash_name``.
        mask_selector: Optional mask slot selector override.
        mask_updater: Optional mask update rule override.
        state_manager: Optional feedback state override.

    Returns:
        A ready-to-use :class:`KamisadoCipher`.

    Raises:
        InvalidInput: If the key or IV is missing, empty or of an unsupported
            type.
        ValueError: If the configured hash algorithm is unavailable.
    """
    cfg = cfg or CipherConfig()
    key_bytes = _as_bytes(key, "key", cfg.text_encoding)
    iv_bytes = _as_bytes(iv, "IV", cfg.text_encoding)

    if key_generator is None:
        key_generator = HashKeyGenerator(cfg.hash_name)
        logger.debug("Kamisado key schedule uses %s", cfg.hash_name)

    return KamisadoCipher(
        key_bytes,
        iv_bytes,
        key_generator=key_generator,
        mask_selector=mask_selector or BasicMaskSelector(),
        mask_updater=mask_updater or SBoxMaskUpdater(),
        state_manager=state_manager or CipherStateManager(),
    )

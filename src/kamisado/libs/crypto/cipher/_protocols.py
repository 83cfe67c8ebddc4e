"""
Protocols for the pluggable pieces of the Kamisado stream cipher.

Each protocol has a single production implementation in
:mod:`._components`; alternative implementations can be passed to
:func:`kamisado.libs.crypto.cipher.Kamisado.new`.
"""

from typing import Protocol


class KeyGeneratorProtocol(Protocol):
    """Derives the initial mask table from a secret key."""

    def generate_key(self, key: bytes, length: int) -> bytes:
        """Derive ``length`` bytes of mask material from ``key``.

        Args:
            key: Non-empty secret key.
            length: Number of output bytes.

        Returns:
            Exactly ``length`` bytes. The result must depend on ``key`` only.
        """
        ...


class MaskSelectorProtocol(Protocol):
    """Chooses which mask slot is used for the next byte."""

    def select_index(self, current_color: int) -> int:
        """Map the feedback byte to a mask index.

        Args:
            current_color: Current feedback byte (0-255).

        Returns:
            A slot index in ``range(8)``.
        """
        ...


class MaskUpdaterProtocol(Protocol):
    """Computes the replacement for a mask after it has been used."""

    def update_mask(self, mask: int, index: int) -> int:
        """Return the next value of the mask stored at ``index``.

        Args:
            mask: The mask byte just used for XOR.
            index: The slot the mask was read from.

        Returns:
            The new mask byte (0-255).
        """
        ...


class StateManagerProtocol(Protocol):
    """Holds the single feedback byte ("current color")."""

    def reset_state(self, initial_color: int) -> None: ...

    def update_state(self, processed_byte: int) -> None: ...

    def get_current_color(self) -> int: ...

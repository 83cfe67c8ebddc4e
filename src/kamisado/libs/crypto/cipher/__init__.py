"""
Cipher implementations.

Each cipher lives in its own module exposing a ``new()`` factory::

    from kamisado.libs.crypto.cipher import Kamisado

    cipher = Kamisado.new(b"secret key", b"\x3f")
    ct = cipher.encrypt(b"attack at dawn")
"""

__all__ = ["Kamisado"]

from . import Kamisado

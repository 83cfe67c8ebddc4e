"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass


@dataclass
class CipherConfig:
    """Configuration for building a Kamisado cipher.

    Attributes:
        hash_name: Hash algorithm used by the key schedule (any name accepted
            by :func:`hashlib.new` with a fixed digest size).
        text_encoding: Encoding applied when a key or IV is given as ``str``.
    """

    hash_name: str = "sha256"
    text_encoding: str = "utf-8"

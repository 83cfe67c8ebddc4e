import hashlib


def digest_bytes(data: bytes, algorithm: str = "sha256") -> bytes:
    """Compute the raw digest of a bytes object.

    Args:
        data: The bytes to hash.
        algorithm: Any algorithm name accepted by :func:`hashlib.new`.
            Defaults to ``"sha256"``.

    Returns:
        The binary digest.

    Raises:
        ValueError: If the algorithm is unknown or has a variable-length
            digest (for example ``shake_128``).
    """
    try:
        h = hashlib.new(algorithm)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Unsupported hash algorithm: {algorithm!r}") from e

    if h.digest_size == 0:
        raise ValueError(f"Hash algorithm {algorithm!r} has no fixed digest size")

    h.update(data)
    return h.digest()


def hash_bytes(data: bytes, algorithm: str = "sha256") -> str:
    """Compute the hash of a bytes object as hex.

    Args:
        data: The bytes to hash.
        algorithm: Hash algorithm name. Defaults to ``"sha256"``.

    Returns:
        The digest as a lowercase hexadecimal string.
    """
    return digest_bytes(data, algorithm).hex()

class CipherError(Exception):
    """Base class for errors raised by the crypto library."""


class InvalidInput(CipherError, ValueError):
    """Indicates a missing, empty or ill-typed key or IV."""

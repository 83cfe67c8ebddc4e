"""
Pure-Python cryptographic primitives used by Kamisado.
"""

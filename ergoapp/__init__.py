"""BLAKE2b hashing, a recording hasher and APDU protocol definitions for an Ergo signing application."""

__version__ = "0.0.3"
__all__ = ["blake2b", "hasher", "protocol"]
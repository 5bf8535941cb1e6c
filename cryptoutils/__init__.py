"""Helpers for cryptographic code: blob storage, block buffers, padding, GF(2^n) doubling, hex literals and Wycheproof conversion."""

__version__ = "0.1.0"
"""Wallet building blocks: password hashing, sharded keys, keypairs, codecs, memos and fees."""

__version__ = "0.1.0"
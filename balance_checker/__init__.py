"""Concurrent SOL balance checker for a list of wallets."""

__version__ = "0.1.0"

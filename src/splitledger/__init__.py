"""Ledger arithmetic for shared group expenses."""

__version__ = "0.1.0"

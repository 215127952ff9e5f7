"""Sigil - email/password authentication with signed session tokens."""

__version__ = "0.1.0"

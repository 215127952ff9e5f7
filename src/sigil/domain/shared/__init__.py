"""Shared domain utilities."""

from sigil.domain.shared.time import utc_now

__all__ = ["utc_now"]

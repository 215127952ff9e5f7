"""Domain layer for Sigil."""

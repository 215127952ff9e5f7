"""Infrastructure layer for Sigil."""

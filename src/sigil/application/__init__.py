"""Application layer for Sigil."""

"""Command-line interface for Sigil."""

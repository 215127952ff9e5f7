"""HTTP/JSON API for Sigil."""

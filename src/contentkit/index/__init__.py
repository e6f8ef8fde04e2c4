"""Search index generation."""

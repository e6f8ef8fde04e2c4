"""Content file loading and metadata header parsing."""

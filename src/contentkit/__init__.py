"""contentkit - build-time tooling for markdown blog content."""

__version__ = "0.1.0"

"""Frontmatter and link checks."""

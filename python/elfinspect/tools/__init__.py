"""Command-line tools for elfinspect."""

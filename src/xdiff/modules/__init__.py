"""Core modules for xdiff."""

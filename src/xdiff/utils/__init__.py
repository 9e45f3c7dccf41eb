"""Utility helpers for xdiff."""

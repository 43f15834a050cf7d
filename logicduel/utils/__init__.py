"""Shared helpers: logging and text rendering."""

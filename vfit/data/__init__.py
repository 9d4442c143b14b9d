"""Bundled demo catalog."""

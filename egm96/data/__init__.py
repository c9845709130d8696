"""Bundled offset grid files."""

"""Bundled furniture preset JSON files."""

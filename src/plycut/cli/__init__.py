"""Command-line interface for plycut."""

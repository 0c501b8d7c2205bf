"""REST API for plycut."""

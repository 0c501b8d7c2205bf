"""Plywood sheet cut optimizer."""

__version__ = "1.0.0"

"""Adapter layer: concrete implementations of the application ports."""

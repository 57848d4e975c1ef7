"""Application layer: adapter ports and the adapter registry."""

"""Domain layer: error taxonomy, probe results, and key-path helpers."""

"""Logger hierarchy, levels, records and broadcast channels."""

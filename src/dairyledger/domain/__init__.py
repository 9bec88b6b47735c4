"""Domain layer: repository protocols."""

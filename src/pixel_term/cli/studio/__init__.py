"""Interactive terminal applications."""

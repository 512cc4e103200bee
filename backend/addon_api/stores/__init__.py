"""Data sources backing the addon handlers."""

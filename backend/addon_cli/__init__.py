"""Typer CLI for querying a running Sports Live addon."""

"""Typer CLI for relkit."""

"""Flowsmith CLI — Typer-based command-line interface.

Provides the ``flowsmith`` command for listing registered creators and
for broadcasting creation requests from the shell.

All output uses Rich for formatted terminal display.
"""

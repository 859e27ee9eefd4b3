"""
SCRIPTOR - Command Line Interface

Main CLI entry point for verse lookup, search and cross references.
"""
from cli.main import app, main

__all__ = ["app", "main"]

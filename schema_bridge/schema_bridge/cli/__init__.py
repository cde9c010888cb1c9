"""Command line front end for schema_bridge."""

from .run_validate import main

__all__ = ['main']

"""Clarivana Utils - Harmful ingredient detection for scanned food labels."""

__version__ = "0.1.0"

from . import database, ingredients, remote

__all__ = ["database", "ingredients", "remote"]

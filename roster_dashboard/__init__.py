"""Roster dashboard: remote-paginated member and parent grids in the terminal."""

__version__ = "0.1.0"

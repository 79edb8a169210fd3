"""A tile-based puzzle game: collect the items, avoid enemies, reach the exit."""

__version__ = "0.1.0"
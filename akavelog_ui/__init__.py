"""Client engine and terminal front end for the Akavelog demo dashboard."""

__version__ = "0.1.0"

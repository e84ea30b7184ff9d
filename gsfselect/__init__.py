"""Browse GSF/miniGSF music from a game controller and drive an external player."""

__version__ = "0.1.0"
"""A tile-based collect-and-escape puzzle game with map validation and XPM textures."""

__version__ = "1.0.0"
__all__ = ["colors", "xpm", "mapfile", "game", "app"]
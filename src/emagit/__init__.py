"""emagit: a magit-style menu-driven git porcelain for the terminal."""

__version__ = "0.1.0"

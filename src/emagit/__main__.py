# emagit/__main__.py
"""Allows ``python -m emagit``; git invokes the message editor this way."""

from emagit.main import start


if __name__ == "__main__":
    start()

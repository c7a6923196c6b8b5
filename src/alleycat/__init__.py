"""ALLEYCAT - endless runner with a cat, cacti, trash cans and birds."""

__version__ = "0.1.0"

"""Backend for the image studio demo."""

__version__ = "0.1.0"

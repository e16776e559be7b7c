"""Flask UI and JSON API over a loaded dictionary (see web.py)."""
from .web import app, main

__all__ = ["app", "main"]

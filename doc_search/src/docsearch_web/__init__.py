"""Flask UI and command line front-ends for the document search engine."""
from __future__ import annotations
from .web import app, serve

__all__ = ["app", "serve"]

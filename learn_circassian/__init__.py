# learn_circassian\__init__.py
"""
Learn Circassian Dictionary - local search & lookup backend.

This package serves prefix/substring word search and multi-dictionary entry
lookup over a read-only SQLite store, and downloads that store on first run.
It follows Hexagonal Architecture (Ports & Adapters): the desktop UI talks to
it through a loopback FastAPI surface.
"""

__version__ = "1.0.0"

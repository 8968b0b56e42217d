"""Database module."""
from database.db import db, InMemoryStore

__all__ = ["db", "InMemoryStore"]

"""Database base and demo models."""

from packages.db.base import Base, get_database_url, get_engine

__all__ = ["Base", "get_database_url", "get_engine"]

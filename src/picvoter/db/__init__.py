# src/picvoter/db/__init__.py
"""Database configuration and utilities."""

from .session import Base, build_engine, build_session_factory, create_tables, get_db

__all__ = ["Base", "build_engine", "build_session_factory", "create_tables", "get_db"]

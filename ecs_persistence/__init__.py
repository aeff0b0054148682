"""
ECS Persistence module.

This module contains the database implementation for world snapshot storage.
Currently supports SQLite, but can be extended to PostgreSQL, MySQL, etc.

The persistence layer depends only on ecs_common for models and interfaces.
"""

from .sqlite_repository import SQLiteWorldRepository

__all__ = ["SQLiteWorldRepository"]

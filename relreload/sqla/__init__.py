"""
SQLAlchemy integration.

Provides a ModelAdapter over SQLAlchemy 2.x AsyncSession so declarative
models can be reloaded recursively.
"""

from .adapter import SQLAlchemyAdapter

__all__ = ["SQLAlchemyAdapter"]

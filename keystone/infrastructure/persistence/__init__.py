"""Persistence adapters (SQLAlchemy async)."""

from keystone.infrastructure.persistence.base import BaseModel, BaseMutableModel
from keystone.infrastructure.persistence.database import Database

__all__ = ["BaseModel", "BaseMutableModel", "Database"]

"""
Models module - SQLAlchemy Core table definitions.

Request/response models live in app.schemas.
"""
from app.models.tables import metadata, create_schema, drop_schema, TABLE_NAMES

__all__ = ["metadata", "create_schema", "drop_schema", "TABLE_NAMES"]

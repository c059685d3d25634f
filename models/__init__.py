"""
SQLAlchemy ORM models for database tables.

Models:
    base: Base declarative class and shared enums (StructureType, MarkCategory)
    navigation_aid: Unified, normalized navigation aids with PostGIS geometry

Usage:
    from models.base import Base
    from models.navigation_aid import NavigationAid

Only the destination table is modelled here. The per-dataset schemas that
Kart materializes are read reflectively by ingestion.extractors.source_reader.
"""

__all__ = [
    "Base",
    "StructureType",
    "MarkCategory",
    "NavigationAid",
]

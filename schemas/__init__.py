"""
Pydantic schemas for validation and serialization.

Schemas:
    catalogue: Repository catalogue entries and the catalogue document
    normalized: Normalized navigation aid records and GeoJSON points
    pipeline: Sync/transform outcomes and run summaries
    api: API response bodies

Usage:
    from schemas.catalogue import DatasetDescriptor
    from schemas.pipeline import PipelineRunResult
"""

__all__ = [
    "DatasetDescriptor",
    "Catalogue",
    "NavigationAidCreate",
    "GeoJSONPoint",
    "SyncResult",
    "TransformResult",
    "PipelineRunResult",
    "HealthResponse",
]

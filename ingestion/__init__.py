"""
Pipeline components for syncing Kart repositories and normalizing them.

Modules:
    pipeline: PipelineService (sync then transform) and the PipelineGuard
    runner: TransformRunner, the transform stage orchestrator
    scheduler: APScheduler integration for interval-triggered runs

Subpackages:
    sync: kart client, RepositorySyncer and SyncOrchestrator
    extractors: SourceReader for Kart working-copy schemas
    transformers: S-57 code tables, row normalizers and their registry
    loaders: PostgresLoader with idempotent upsert into navigation_aids

Architecture:
    1. Sync - one schema per catalogued repository, failures isolated
    2. Transform - registry dispatch by schema key, strict per-schema batches
    3. Load - upsert on the natural key source_key

Usage:
    from ingestion.pipeline import PipelineService

    service = PipelineService()
    result = await service.run()
    print(result.summary.transform.succeeded)
"""

__all__ = [
    "PipelineService",
    "PipelineGuard",
    "TransformRunner",
    "SyncOrchestrator",
    "RepositorySyncer",
    "KartClient",
    "SourceReader",
    "TransformerRegistry",
    "PostgresLoader",
]

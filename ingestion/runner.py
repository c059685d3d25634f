# ============================================================================
# File: ingestion/runner.py
# Description: Transform stage orchestrator
# ============================================================================
"""
Transform Runner - drives read -> normalize -> upsert per schema.

This module provides:
- Registry dispatch by schema key (unregistered schemas are skipped)
- Whole-batch normalization (one bad row fails its schema)
- Sequential idempotent upsert into navigation_aids
- Per-schema failure isolation: every call returns a TransformResult
"""

import time
from typing import Iterable, List, Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ETLException
from ingestion.extractors.source_reader import SourceReader
from ingestion.loaders.postgres_loader import PostgresLoader
from ingestion.transformers.registry import TransformerRegistry, build_default_registry
from schemas.pipeline import OutcomeStatus, TransformResult, TransformSummary

logger = logging.getLogger(__name__)


def _elapsed_ms(start_time: float) -> int:
    return int((time.perf_counter() - start_time) * 1000)


def _error_message(error: Exception) -> str:
    if isinstance(error, ETLException):
        return error.message
    return str(error) or type(error).__name__


class TransformRunner:
    """
    Transform stage orchestrator

    Responsibilities:
    - Look up the normalizer for each schema key
    - Read every source row of the schema
    - Normalize the full batch before writing anything
    - Upsert sequentially and commit once per schema
    - Convert any error into a failure result, never raise
    """

    def __init__(
        self,
        db_session: AsyncSession,
        registry: Optional[TransformerRegistry] = None,
        reader: Optional[SourceReader] = None,
        loader: Optional[PostgresLoader] = None,
    ):
        self.db = db_session
        self.registry = registry if registry is not None else build_default_registry()
        self.reader = reader or SourceReader(db_session)
        self.loader = loader or PostgresLoader(db_session)

    async def transform_schema(self, schema_key: str) -> TransformResult:
        """
        Transform one schema's rows into navigation_aids.

        Returns:
            TransformResult with status success, failure or skipped
        """
        start_time = time.perf_counter()

        normalizer = self.registry.get(schema_key)
        if normalizer is None:
            logger.warning(f"No transformer registered for schema {schema_key}, skipping")
            return TransformResult(
                status=OutcomeStatus.SKIPPED,
                schema_key=schema_key,
                duration_ms=_elapsed_ms(start_time),
            )

        rows_processed = 0

        try:
            logger.info(f"Starting transformation for {schema_key}")

            # --------------------------------------------------
            # PHASE 1: READ SOURCE ROWS
            # --------------------------------------------------
            source_rows = await self.reader.read_schema(schema_key)
            rows_processed = len(source_rows)
            logger.debug(f"Fetched {rows_processed} source rows for {schema_key}")

            if not source_rows:
                logger.warning(f"No rows found in source schema {schema_key}")
                return TransformResult(
                    status=OutcomeStatus.SUCCESS,
                    schema_key=schema_key,
                    duration_ms=_elapsed_ms(start_time),
                )

            # --------------------------------------------------
            # PHASE 2: NORMALIZE (whole batch, strict)
            # --------------------------------------------------
            normalized = [normalizer(schema_key, row) for row in source_rows]
            logger.debug(f"Normalized {len(normalized)} rows for {schema_key}")

            # --------------------------------------------------
            # PHASE 3: UPSERT
            # --------------------------------------------------
            rows_upserted = await self.loader.load(normalized)

            logger.info(
                f"Transformation completed for {schema_key}: "
                f"processed={rows_processed}, upserted={rows_upserted}"
            )

            return TransformResult(
                status=OutcomeStatus.SUCCESS,
                schema_key=schema_key,
                rows_processed=rows_processed,
                rows_upserted=rows_upserted,
                duration_ms=_elapsed_ms(start_time),
            )

        except Exception as e:
            message = _error_message(e)
            logger.error(
                f"Transformation failed for {schema_key}: {message}",
                extra={"error_context": e.to_dict() if isinstance(e, ETLException) else {"error": message}}
            )

            await self._rollback(schema_key)

            return TransformResult(
                status=OutcomeStatus.FAILURE,
                schema_key=schema_key,
                rows_processed=rows_processed,
                rows_upserted=0,
                duration_ms=_elapsed_ms(start_time),
                error=message,
            )

    async def transform_all(self, schema_keys: Iterable[str]) -> TransformSummary:
        """
        Transform schemas one after another, continuing past failures.

        Returns:
            TransformSummary with results in input order
        """
        results: List[TransformResult] = []

        for schema_key in schema_keys:
            results.append(await self.transform_schema(schema_key))

        summary = TransformSummary(
            total=len(results),
            succeeded=sum(1 for r in results if r.status == OutcomeStatus.SUCCESS),
            failed=sum(1 for r in results if r.status == OutcomeStatus.FAILURE),
            skipped=sum(1 for r in results if r.status == OutcomeStatus.SKIPPED),
            results=results,
        )

        logger.info(
            f"Transform summary: total={summary.total}, succeeded={summary.succeeded}, "
            f"failed={summary.failed}, skipped={summary.skipped}"
        )
        return summary

    async def _rollback(self, schema_key: str) -> None:
        try:
            await self.db.rollback()
        except Exception:
            logger.exception(f"Rollback failed after transform error in {schema_key}")

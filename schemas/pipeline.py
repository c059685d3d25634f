"""
Outcome records produced by the sync and transform orchestrators.

Expected per-item failures are reported through these discriminated result
types instead of exceptions, so a failing dataset or schema never stops the
ones after it.
"""

import enum
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field

from schemas.catalogue import DatasetDescriptor


class OutcomeStatus(str, enum.Enum):
    """Per-item outcome status"""
    SUCCESS = "success"
    FAILURE = "failure"
    SKIPPED = "skipped"


# ============================================================================
# Sync Stage
# ============================================================================

class SyncErrorInfo(BaseModel):
    """Credential-masked description of why a dataset failed to sync"""
    message: str
    error_type: str
    command: Optional[str] = None
    exit_code: Optional[int] = None
    stderr: Optional[str] = None


class SyncSuccess(BaseModel):
    status: Literal["success"] = "success"
    dataset: DatasetDescriptor
    schema_name: str
    duration_ms: int


class SyncFailure(BaseModel):
    status: Literal["failure"] = "failure"
    dataset: DatasetDescriptor
    error: SyncErrorInfo
    duration_ms: int


SyncResult = Annotated[Union[SyncSuccess, SyncFailure], Field(discriminator="status")]


class SyncSummary(BaseModel):
    total: int
    succeeded: int
    failed: int
    results: List[SyncResult] = Field(default_factory=list)


# ============================================================================
# Transform Stage
# ============================================================================

class TransformResult(BaseModel):
    status: OutcomeStatus
    schema_key: str
    rows_processed: int = 0
    rows_upserted: int = 0
    duration_ms: int = 0
    error: Optional[str] = None

    class Config:
        use_enum_values = True


class TransformSummary(BaseModel):
    total: int
    succeeded: int
    failed: int
    skipped: int
    results: List[TransformResult] = Field(default_factory=list)


# ============================================================================
# Trigger Response
# ============================================================================

class SyncCounts(BaseModel):
    total: int
    succeeded: int
    failed: int


class TransformCounts(BaseModel):
    total: int
    succeeded: int
    failed: int
    skipped: int


class PipelineCounts(BaseModel):
    sync: SyncCounts
    transform: TransformCounts


class PipelineRunResult(BaseModel):
    """Aggregate result of one sync-then-transform run"""
    success: bool
    summary: PipelineCounts

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "summary": {
                    "sync": {"total": 6, "succeeded": 6, "failed": 0},
                    "transform": {"total": 6, "succeeded": 5, "failed": 0, "skipped": 1}
                }
            }
        }

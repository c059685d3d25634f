"""
Custom exceptions for the sync/transform pipeline with structured error context.

Each exception carries a context dictionary for logging and for the
outcome records produced by the orchestrators.

Exception Hierarchy:
    ETLException (base)
    ├── ConfigError
    ├── SshSetupError
    ├── ExternalToolError
    │   └── KartError
    ├── TransformationError
    │   └── ValidationError
    │       └── GeometryValidationError
    ├── LoadError
    │   └── UpsertError
    └── PipelineAlreadyRunningError
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class ETLException(Exception):
    """
    Base exception for all pipeline errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (dataset, schema, timestamp, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigError(ETLException):
    """
    Raised when the dataset catalogue or settings cannot be used.

    Fatal: aborts the run before any pipeline work starts.
    """
    pass


class SshSetupError(ETLException):
    """Raised when the SSH private key cannot be installed for Kart."""
    pass


# ============================================================================
# External Tool Errors
# ============================================================================

class ExternalToolError(ETLException):
    """Base exception for failures of external processes."""
    pass


class KartError(ExternalToolError):
    """
    Raised when a kart command exits non-zero or cannot be spawned.

    The command string and stderr must already be credential-masked.
    """

    def __init__(
        self,
        message: str,
        command: str,
        exit_code: Optional[int],
        stderr: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        context = dict(context or {})
        context.update({"command": command, "exit_code": exit_code})
        super().__init__(message, context, original_exception)
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr


# ============================================================================
# Transformation Errors
# ============================================================================

class TransformationError(ETLException):
    """Base exception for normalization failures."""
    pass


class ValidationError(TransformationError):
    """
    Raised when a source row fails validation.

    Context should include:
        - schema_key: Schema identifier being transformed
        - fidn: Feature id of the offending row
    """
    pass


class GeometryValidationError(ValidationError):
    """Raised when a source row carries no renderable point geometry."""
    pass


# ============================================================================
# Load Errors
# ============================================================================

class LoadError(ETLException):
    """Base exception for destination write failures."""
    pass


class UpsertError(LoadError):
    """
    Raised when an upsert into navigation_aids fails.

    Context should include:
        - source_key: Natural key of the record being written
    """
    pass


# ============================================================================
# Pipeline Control
# ============================================================================

class PipelineAlreadyRunningError(ETLException):
    """Raised when a run is triggered while another one is in flight."""

    def __init__(self, message: str = "Sync already in progress"):
        super().__init__(message)

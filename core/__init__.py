"""
Core utilities and configuration for the navaid-sync service.

Modules:
    config: Application configuration and environment variable management
    database: Database engine, session management and schema administration
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration
    catalogue: Dataset catalogue (repos.yaml) loading and validation
    security: Credential masking for connection strings
    ssh: SSH key installation for Kart

Usage:
    from core.config import settings
    from core.catalogue import load_repositories
    from core.logging import setup_logging
"""

__all__ = [
    "settings",
    "get_session",
    "setup_logging",
    "load_repositories",
    "mask_credentials",
    "setup_ssh_key",
    # Exceptions
    "ETLException",
    "ConfigError",
    "SshSetupError",
    "ExternalToolError",
    "KartError",
    "TransformationError",
    "ValidationError",
    "GeometryValidationError",
    "LoadError",
    "UpsertError",
    "PipelineAlreadyRunningError",
]

"""
Dataset catalogue loading.

The catalogue is read fresh for every pipeline run and either loads
completely or raises ConfigError; a partial catalogue is never returned.
"""

from pathlib import Path
from typing import List, Optional
import logging

import yaml
from pydantic import ValidationError as PydanticValidationError

from core.config import settings
from core.exceptions import ConfigError
from schemas.catalogue import Catalogue, DatasetDescriptor

logger = logging.getLogger(__name__)


def load_repositories(config_path: Optional[str] = None) -> List[DatasetDescriptor]:
    """
    Load and validate the dataset catalogue.

    Args:
        config_path: Path to the YAML file (defaults to settings.REPOS_CONFIG_PATH)

    Returns:
        Descriptors in file order

    Raises:
        ConfigError: If the file is unreadable, not YAML, or fails validation
    """
    path = Path(config_path or settings.REPOS_CONFIG_PATH)

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            f"Failed to read config file: {path}",
            context={"config_path": str(path)},
            original_exception=e
        )

    try:
        parsed = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Failed to parse YAML: {e}",
            context={"config_path": str(path)},
            original_exception=e
        )

    try:
        catalogue = Catalogue.model_validate(parsed)
    except PydanticValidationError as e:
        raise ConfigError(
            f"Invalid config: {e}",
            context={"config_path": str(path), "error_count": e.error_count()},
            original_exception=e
        )

    logger.info(f"Loaded {len(catalogue.repositories)} repositories from {path}")
    return list(catalogue.repositories)

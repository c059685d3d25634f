"""
Registry mapping schema keys to their normalizers.

Lookup is exact: every schema key has to be registered on its own, even
when several scales share one normalizer. Schemas that are not registered
are skipped by the transform stage.
"""

from typing import Dict, Iterable, List, Optional
import logging

from ingestion.transformers.lateral import normalize_beacon_lateral, normalize_buoy_lateral
from ingestion.transformers.normalizer import Normalizer
from schemas.catalogue import ScaleBand

logger = logging.getLogger(__name__)


class TransformerRegistry:
    """Closed, explicitly populated mapping of schema key -> normalizer."""

    def __init__(self, normalizers: Optional[Dict[str, Normalizer]] = None):
        self._normalizers: Dict[str, Normalizer] = dict(normalizers or {})

    def register(self, schema_key: str, normalizer: Normalizer) -> None:
        if schema_key in self._normalizers:
            logger.warning(f"Replacing normalizer registered for {schema_key}")
        self._normalizers[schema_key] = normalizer

    def register_many(self, schema_keys: Iterable[str], normalizer: Normalizer) -> None:
        for schema_key in schema_keys:
            self.register(schema_key, normalizer)

    def get(self, schema_key: str) -> Optional[Normalizer]:
        """Normalizer for a schema key, or None if none is registered."""
        return self._normalizers.get(schema_key)

    def has(self, schema_key: str) -> bool:
        return schema_key in self._normalizers

    def registered_schemas(self) -> List[str]:
        return list(self._normalizers)

    def __contains__(self, schema_key: object) -> bool:
        return schema_key in self._normalizers

    def __len__(self) -> int:
        return len(self._normalizers)


def build_default_registry() -> TransformerRegistry:
    """Registry with every normalizer this service ships."""
    registry = TransformerRegistry()
    scales = [scale.value for scale in ScaleBand]

    # Lateral beacons - all scales use the same normalizer
    registry.register_many(
        (f"navigation_aids__bcnlat__{scale}" for scale in scales),
        normalize_beacon_lateral,
    )
    # Lateral buoys - all scales use the same normalizer
    registry.register_many(
        (f"navigation_aids__boylat__{scale}" for scale in scales),
        normalize_buoy_lateral,
    )
    return registry

"""
Unit tests for the transformer registry
"""

from unittest.mock import Mock
from ingestion.transformers.lateral import normalize_beacon_lateral, normalize_buoy_lateral
from ingestion.transformers.registry import TransformerRegistry, build_default_registry


def test_default_registry_covers_every_scale():
    registry = build_default_registry()

    assert len(registry) == 10
    for scale in ("harbor", "approach", "coastal", "general", "overview"):
        assert registry.get(f"navigation_aids__boylat__{scale}") is normalize_buoy_lateral
        assert registry.get(f"navigation_aids__bcnlat__{scale}") is normalize_beacon_lateral


def test_lookup_is_exact():
    registry = build_default_registry()

    assert registry.get("navigation_aids__boylat") is None
    assert registry.get("navigation_aids__boycar__harbor") is None
    assert "NAVIGATION_AIDS__BOYLAT__HARBOR" not in registry
    assert not registry.has("navigation_aids__boylat__harbour")


def test_register_replaces_existing():
    first, second = Mock(), Mock()
    registry = TransformerRegistry({"a__b__harbor": first})

    registry.register("a__b__harbor", second)

    assert registry.get("a__b__harbor") is second
    assert registry.registered_schemas() == ["a__b__harbor"]

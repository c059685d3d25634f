"""
Unit tests for the sync stage
"""

import pytest
from unittest.mock import AsyncMock, Mock
from core.exceptions import KartError
from ingestion.sync.syncer import (
    RepositorySyncer,
    SyncOrchestrator,
    build_working_copy_url,
    sanitize_for_path,
    working_directory,
)
from schemas.catalogue import DatasetDescriptor

DB_URL = "postgresql+asyncpg://navaid:s3cret@db:5432/navaid_db"


def make_syncer(tmp_path, kart=None, dropper=None):
    if kart is None:
        kart = Mock()
        kart.clone = AsyncMock()
        kart.create_working_copy = AsyncMock()
    return RepositorySyncer(
        kart=kart,
        schema_dropper=dropper or AsyncMock(),
        work_root=tmp_path / "work",
        database_url=DB_URL,
    )


def test_sanitize_for_path():
    assert sanitize_for_path("Lateral Buoys (Harbor)") == "lateral_buoys__harbor_"
    assert sanitize_for_path("a-b_C") == "a-b_c"


@pytest.mark.parametrize("url", [
    "postgresql+asyncpg://u:p@h:5432/db",
    "postgresql://u:p@h:5432/db/",
    "postgres://u:p@h:5432/db",
])
def test_build_working_copy_url(url):
    assert build_working_copy_url(url, "navigation_aids__boylat__harbor") == (
        "postgresql://u:p@h:5432/db/navigation_aids__boylat__harbor"
    )


def test_build_working_copy_url_keeps_query_string_last():
    url = build_working_copy_url("postgresql+asyncpg://u:p@h:5432/db?ssl=require", "navigation_aids__boylat__harbor")

    assert url == "postgresql://u:p@h:5432/db/navigation_aids__boylat__harbor?ssl=require"


def test_working_directory_is_fresh_and_removed(tmp_path):
    path = tmp_path / "repo"
    path.mkdir()
    (path / "stale").write_text("left over")

    with working_directory(path) as work_dir:
        assert work_dir.exists()
        assert list(work_dir.iterdir()) == []

    assert not path.exists()


def test_working_directory_removed_on_error(tmp_path):
    path = tmp_path / "repo"

    with pytest.raises(RuntimeError):
        with working_directory(path):
            raise RuntimeError("boom")

    assert not path.exists()


@pytest.mark.asyncio
async def test_sync_success_runs_steps_in_order(tmp_path, dataset):
    calls = []
    kart = Mock()
    kart.clone = AsyncMock(side_effect=lambda url, dest: calls.append(("clone", url)))
    kart.create_working_copy = AsyncMock(side_effect=lambda path, url: calls.append(("workingcopy", url)))
    dropper = AsyncMock(side_effect=lambda schema: calls.append(("drop", schema)))
    syncer = make_syncer(tmp_path, kart=kart, dropper=dropper)

    result = await syncer.sync(dataset)

    assert result.status == "success"
    assert result.schema_name == dataset.key
    assert calls == [
        ("drop", dataset.key),
        ("clone", dataset.url),
        ("workingcopy", f"postgresql://navaid:s3cret@db:5432/navaid_db/{dataset.key}"),
    ]
    assert not syncer.work_dir_for(dataset).exists()


@pytest.mark.asyncio
async def test_kart_failure_is_reported_masked(tmp_path, dataset):
    kart = Mock()
    kart.clone = AsyncMock()
    kart.create_working_copy = AsyncMock(side_effect=KartError(
        "Failed to create working copy",
        command="kart create-workingcopy postgresql://navaid:s3cret@db:5432/navaid_db/x",
        exit_code=128,
        stderr="could not connect to postgresql://navaid:s3cret@db/x\n",
    ))
    syncer = make_syncer(tmp_path, kart=kart)

    result = await syncer.sync(dataset)

    assert result.status == "failure"
    assert result.error.error_type == "KartError"
    assert result.error.exit_code == 128
    assert "s3cret" not in result.error.command
    assert "s3cret" not in result.error.stderr
    assert "***" in result.error.stderr
    assert not syncer.work_dir_for(dataset).exists()


@pytest.mark.asyncio
async def test_drop_failure_skips_clone(tmp_path, dataset):
    dropper = AsyncMock(side_effect=RuntimeError("permission denied for schema"))
    syncer = make_syncer(tmp_path, dropper=dropper)

    result = await syncer.sync(dataset)

    assert result.status == "failure"
    assert result.error.message == "permission denied for schema"
    syncer.kart.clone.assert_not_called()


@pytest.mark.asyncio
async def test_sync_all_isolates_failures(tmp_path, dataset):
    broken = DatasetDescriptor(
        key="navigation_aids__bcnlat__coastal",
        name="Broken",
        category="navigation_aids",
        scale="coastal",
        url="kart@example.invalid:missing",
    )
    kart = Mock()
    kart.clone = AsyncMock(side_effect=lambda url, dest: _fail_for(url, broken.url))
    kart.create_working_copy = AsyncMock()
    orchestrator = SyncOrchestrator(make_syncer(tmp_path, kart=kart))

    summary = await orchestrator.sync_all([broken, dataset])

    assert summary.total == 2
    assert summary.succeeded == 1
    assert summary.failed == 1
    assert [r.status for r in summary.results] == ["failure", "success"]
    assert summary.results[0].dataset.key == broken.key


def _fail_for(url, failing_url):
    if url == failing_url:
        raise KartError("Failed to clone repository", command="kart clone", exit_code=1, stderr="not found")

"""
Test: Maglev router snapshot publication

This test validates the MaglevRouter implementation:
1. Rebuilds publish a new snapshot with an incremented version
2. Lookups read the published table without locking
3. Failed rebuilds keep the previous snapshot
4. Dry-run movement counts never publish

Run with: pytest tests/unit/routing/test_maglev_router.py
"""

import asyncio
import io

import pytest

from maglev.env import Env
from maglev.errors import InvalidWeight, NoPositiveWeight
from maglev.logging import LoggerStream, LoggingConfig, LogLevel
from maglev.routing import MaglevRouter, TableSnapshot
from maglev.table import build_table, count_movements


def create_router(table_size: int = 1024) -> tuple[MaglevRouter, io.StringIO]:
    output = io.StringIO()
    router = MaglevRouter(
        env=Env(MAGLEV_TABLE_SIZE=table_size, MAGLEV_LOG_LEVEL="info"),
        logger=LoggerStream(name="test.router", stderr=output),
    )

    return router, output


@pytest.mark.asyncio
async def test_rebuild_publishes_snapshot(make_shards):
    router, _ = create_router()
    shards = make_shards(1, 1, 2)

    snapshot = await router.rebuild(shards)

    assert router.snapshot is snapshot
    assert snapshot.version == 1
    assert snapshot.table_size == 1024
    assert snapshot.shards == tuple(shards)
    assert snapshot.table == build_table(shards, 1024)


@pytest.mark.asyncio
async def test_lookup_masks_item_hash(make_shards, shard_hash):
    router, _ = create_router()
    shards = make_shards(1, 2, 3)
    snapshot = await router.rebuild(shards)

    for item in ("picture1", "picture2", "video-99"):
        item_hash = shard_hash(item)
        shard_index = snapshot.table[item_hash % 1024]

        assert router.lookup(item_hash) == shard_index
        assert router.lookup_shard(item_hash) == shards[shard_index]


@pytest.mark.asyncio
async def test_rebuild_increments_version(make_shards):
    router, output = create_router()

    first = await router.rebuild(make_shards(100, 100, 100))
    second = await router.rebuild(make_shards(100, 100, 110))

    assert second.version == first.version + 1
    assert router.snapshot is second
    assert "Published table version 2" in output.getvalue()
    assert f"{count_movements(first.table, second.table)} slots moved" in output.getvalue()


@pytest.mark.asyncio
async def test_failed_rebuild_keeps_previous_snapshot(make_shards):
    router, output = create_router()
    published = await router.rebuild(make_shards(1, 1))

    with pytest.raises(InvalidWeight):
        await router.rebuild(make_shards(1, -1))

    with pytest.raises(NoPositiveWeight):
        await router.rebuild(make_shards(0, 0))

    assert router.snapshot is published
    assert "Table rebuild rejected" in output.getvalue()


@pytest.mark.asyncio
async def test_lookup_before_rebuild():
    router, _ = create_router()

    assert router.snapshot is None

    with pytest.raises(RuntimeError):
        router.lookup(42)


@pytest.mark.asyncio
async def test_movements_is_dry_run(make_shards):
    router, _ = create_router()

    assert await router.movements(make_shards(1, 1)) == 1024

    published = await router.rebuild(make_shards(100, 100, 100))
    moved = await router.movements(make_shards(100, 100, 110))

    assert router.snapshot is published
    assert moved == count_movements(
        published.table,
        build_table(make_shards(100, 100, 110), 1024),
    )


@pytest.mark.asyncio
async def test_concurrent_rebuilds_are_serialized(make_shards):
    router, _ = create_router(table_size=4096)

    snapshots = await asyncio.gather(
        router.rebuild(make_shards(1, 1, 1)),
        router.rebuild(make_shards(1, 2, 1)),
        router.rebuild(make_shards(2, 1, 1)),
    )

    assert sorted(snapshot.version for snapshot in snapshots) == [1, 2, 3]
    assert router.snapshot.version == 3


@pytest.mark.asyncio
async def test_uses_configured_apportionment(make_shards):
    output = io.StringIO()
    router = MaglevRouter(
        env=Env(MAGLEV_TABLE_SIZE=1024, MAGLEV_APPORTIONMENT="largest_remainder"),
        logger=LoggerStream(name="test.router", stderr=output),
    )
    shards = make_shards(0.5, 1, 2.1)

    snapshot = await router.rebuild(shards)

    assert snapshot.table == build_table(shards, 1024, apportionment="largest_remainder")


def test_snapshot_lookup(make_shards):
    shards = tuple(make_shards(1, 1))
    snapshot = TableSnapshot(
        table=(0, 1, 1, 0),
        shards=shards,
        table_size=4,
        version=1,
    )

    assert snapshot.lookup(5) == 1
    assert snapshot.lookup(7) == 0
    assert snapshot.lookup_shard(6) == shards[1]


@pytest.mark.asyncio
async def test_default_env_keeps_logging_config(tmp_path):
    log_path = str(tmp_path / "router.json")
    config = LoggingConfig()
    config.update(log_path=log_path, log_level="error")

    MaglevRouter(env=Env(MAGLEV_TABLE_SIZE=1024))

    assert config.path == log_path
    assert config.level == LogLevel.ERROR


@pytest.mark.asyncio
async def test_explicit_env_updates_logging_config(tmp_path):
    log_path = str(tmp_path / "router.json")
    config = LoggingConfig()
    config.update(log_level="error")

    MaglevRouter(env=Env(MAGLEV_LOG_LEVEL="debug", MAGLEV_LOG_PATH=log_path))

    assert config.level == LogLevel.DEBUG
    assert config.path == log_path

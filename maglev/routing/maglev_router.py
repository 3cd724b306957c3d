from __future__ import annotations

import asyncio
import contextvars
import functools
from typing import Sequence

from maglev.env import Env
from maglev.errors import MaglevError
from maglev.logging import LoggerStream, LoggingConfig
from maglev.logging.maglev_logging_models import RouterInfo, TableBuildError
from maglev.table import Shard, Table, build_table, count_movements

from .table_snapshot import TableSnapshot


class MaglevRouter:
    """
    Publishes Maglev tables for lock-free lookups.

    Rebuilds are serialized and run in the default executor. A finished
    table is published by replacing the snapshot reference, so readers
    always see either the previous or the next table, never a partial
    one. A failed rebuild keeps the previous snapshot.

    Logging settings the env sets explicitly (``MAGLEV_LOG_LEVEL``,
    ``MAGLEV_LOG_OUTPUT``, ``MAGLEV_LOG_PATH``) are applied to the
    LoggingConfig of the current context on construction. Settings left
    at their defaults do not touch the existing config.

    Usage:
        router = MaglevRouter(load_env())
        await router.rebuild([Shard(hash=h1, weight=1.0), Shard(hash=h2, weight=2.0)])

        shard_index = router.lookup(item_hash)
    """

    __slots__ = (
        "_env",
        "_logger",
        "_snapshot",
        "_lock",
    )

    def __init__(
        self,
        env: Env | None = None,
        logger: LoggerStream | None = None,
    ) -> None:
        if env is None:
            env = Env()

        configured = env.model_fields_set
        LoggingConfig().update(
            log_level=(
                env.MAGLEV_LOG_LEVEL if "MAGLEV_LOG_LEVEL" in configured else None
            ),
            log_output=(
                env.MAGLEV_LOG_OUTPUT if "MAGLEV_LOG_OUTPUT" in configured else None
            ),
            log_path=(
                env.MAGLEV_LOG_PATH if "MAGLEV_LOG_PATH" in configured else None
            ),
        )

        if logger is None:
            logger = LoggerStream(name="maglev.router")

        self._env = env
        self._logger = logger
        self._snapshot: TableSnapshot | None = None
        self._lock = asyncio.Lock()

    @property
    def table_size(self) -> int:
        return self._env.MAGLEV_TABLE_SIZE

    @property
    def snapshot(self) -> TableSnapshot | None:
        return self._snapshot

    async def rebuild(self, shards: Sequence[Shard]) -> TableSnapshot:
        """
        Build a table for ``shards`` and publish it.

        Raises:
            InvalidWeight: If any weight is negative or not finite.
            NoPositiveWeight: If no shard has a positive weight.
        """
        shards = tuple(shards)

        async with self._lock:
            table = await self._build(shards)

            previous = self._snapshot
            version = previous.version + 1 if previous else 1
            moved_slots = (
                count_movements(previous.table, table) if previous else len(table)
            )

            snapshot = TableSnapshot(
                table=table,
                shards=shards,
                table_size=self.table_size,
                version=version,
            )
            self._snapshot = snapshot

        self._logger.log(
            RouterInfo(
                message=f"Published table version {version}, {moved_slots} slots moved",
                version=version,
                table_size=self.table_size,
                shard_count=len(shards),
                moved_slots=moved_slots,
            )
        )

        return snapshot

    async def movements(self, shards: Sequence[Shard]) -> int:
        """
        Count slots that would change owner if ``shards`` were published.

        Nothing is published. With no current snapshot every slot counts
        as moved.
        """
        shards = tuple(shards)
        table = await self._build(shards)

        current = self._snapshot
        if current is None:
            return len(table)

        return count_movements(current.table, table)

    def lookup(self, item_hash: int) -> int:
        return self._require_snapshot().lookup(item_hash)

    def lookup_shard(self, item_hash: int) -> Shard:
        return self._require_snapshot().lookup_shard(item_hash)

    def _require_snapshot(self) -> TableSnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise RuntimeError("No table has been published, call rebuild() first")

        return snapshot

    async def _build(self, shards: tuple[Shard, ...]) -> Table:
        loop = asyncio.get_running_loop()

        # Executor threads do not inherit context, so carry the logging
        # config across explicitly.
        context = contextvars.copy_context()

        try:
            return await loop.run_in_executor(
                None,
                context.run,
                functools.partial(
                    build_table,
                    shards,
                    self.table_size,
                    apportionment=self._env.MAGLEV_APPORTIONMENT,
                    logger=self._logger,
                ),
            )

        except MaglevError as err:
            self._logger.log(
                TableBuildError(
                    message="Table rebuild rejected",
                    table_size=self.table_size,
                    shard_count=len(shards),
                    error=str(err),
                )
            )

            raise

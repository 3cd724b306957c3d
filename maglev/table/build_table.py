from __future__ import annotations

from typing import Iterable

from maglev.errors import TableSizeViolation
from maglev.logging import LoggerStream
from maglev.logging.maglev_logging_models import TableBuildDebug, TableBuildInfo

from .generator import create_generators
from .placement import finalize_table, place_slots
from .quota import Apportionment, allocate_quotas, average_weight
from .shard import Shard

Table = tuple[int, ...]


def validate_table_size(table_size: int):
    if (
        isinstance(table_size, bool)
        or not isinstance(table_size, int)
        or table_size <= 0
        or table_size & (table_size - 1) != 0
    ):
        raise TableSizeViolation(table_size)


def build_table(
    shards: Iterable[Shard],
    table_size: int,
    apportionment: Apportionment = "accumulate",
    logger: LoggerStream | None = None,
) -> Table:
    """
    Build a Maglev lookup table mapping each slot to a shard index.

    Look items up with ``table[item_hash % table_size]``. The result is
    deterministic for a given ``(shards, table_size)`` and indexes into
    ``shards`` in the order given. ``table_size`` must stay constant for
    the lifetime of the cluster.

    Args:
        shards: Shards to distribute slots across. Not modified.
        table_size: Number of slots, a positive power of two.
        apportionment: How slot quotas are derived from weights.
            ``"accumulate"`` reproduces existing deployments.
        logger: Optional stream for build diagnostics.

    Returns:
        Tuple of ``table_size`` shard indices.

    Raises:
        TableSizeViolation: If ``table_size`` is not a positive power of two.
        InvalidWeight: If any weight is negative or not finite.
        NoPositiveWeight: If no shard has a positive weight.
    """
    validate_table_size(table_size)

    shards = tuple(shards)
    mean_weight = average_weight(shards)

    generators = create_generators(shards, table_size)
    quotas = allocate_quotas(
        generators,
        table_size,
        mean_weight,
        apportionment=apportionment,
    )

    if logger is not None:
        logger.log(
            TableBuildDebug(
                message="Allocated slot quotas",
                table_size=table_size,
                shard_count=len(shards),
                apportionment=apportionment,
                quotas=quotas,
            )
        )

    table = finalize_table(place_slots(generators, table_size))

    if logger is not None:
        logger.log(
            TableBuildInfo(
                message=f"Built table of {table_size} slots for {len(shards)} shards",
                table_size=table_size,
                shard_count=len(shards),
                apportionment=apportionment,
            )
        )

    return table

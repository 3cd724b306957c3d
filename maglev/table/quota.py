from __future__ import annotations

import itertools
import math
from typing import Callable, Literal, Sequence

from maglev.errors import InvalidWeight, NoPositiveWeight

from .generator import ShardGenerator
from .shard import Shard

Apportionment = Literal["accumulate", "largest_remainder"]


def average_weight(shards: Sequence[Shard]) -> float:
    total = 0.0
    for index, shard in enumerate(shards):
        weight = float(shard.weight)
        if weight < 0 or not math.isfinite(weight):
            raise InvalidWeight(index, shard.weight)

        total += weight

    if total == 0:
        raise NoPositiveWeight(len(shards))

    return total / len(shards)


def allocate_accumulated(
    generators: Sequence[ShardGenerator],
    table_size: int,
    mean_weight: float,
):
    """
    Apportion slots by repeatedly accumulating each shard's weight.

    Shards are visited round-robin in hash order. Each visit adds the
    shard's weight to its accumulator and grants one slot per whole
    ``mean_weight`` it holds, until all ``table_size`` slots are granted.
    This is not an exact apportionment, but counts stay within a slot or
    two of the ideal share and existing tables depend on it.
    """
    rest = table_size
    for generator in itertools.cycle(generators):
        if rest == 0:
            break

        generator.weight_accumulator += generator.weight
        if generator.weight_accumulator >= mean_weight:
            granted = min(int(generator.weight_accumulator / mean_weight), rest)
            generator.quota += granted
            rest -= granted
            generator.weight_accumulator -= mean_weight * granted


def allocate_largest_remainder(
    generators: Sequence[ShardGenerator],
    table_size: int,
    mean_weight: float,
):
    """
    Apportion slots by the largest remainder (Hamilton) method.

    Each shard receives the floor of its ideal share and the leftover
    slots go to the largest fractional parts, ties resolved in hash
    order. Produces different tables than ``allocate_accumulated``.
    """
    shard_count = len(generators)
    remainders: list[tuple[float, int]] = []

    granted = 0
    for position, generator in enumerate(generators):
        ideal = table_size * (generator.weight / mean_weight) / shard_count
        generator.quota = min(int(ideal), table_size - granted)
        generator.weight_accumulator = ideal - generator.quota
        granted += generator.quota

        if generator.weight > 0:
            remainders.append((generator.weight_accumulator, position))

    remainders.sort(key=lambda remainder: -remainder[0])

    for _, position in itertools.islice(
        itertools.cycle(remainders),
        table_size - granted,
    ):
        generators[position].quota += 1


ALLOCATORS: dict[
    str,
    Callable[[Sequence[ShardGenerator], int, float], None],
] = {
    "accumulate": allocate_accumulated,
    "largest_remainder": allocate_largest_remainder,
}


def allocate_quotas(
    generators: Sequence[ShardGenerator],
    table_size: int,
    mean_weight: float,
    apportionment: Apportionment = "accumulate",
) -> list[int]:
    allocator = ALLOCATORS.get(apportionment)
    if allocator is None:
        raise ValueError(
            f"Unknown apportionment {apportionment!r}, expected one of "
            f"{', '.join(ALLOCATORS)}"
        )

    allocator(generators, table_size, mean_weight)

    return [generator.quota for generator in generators]

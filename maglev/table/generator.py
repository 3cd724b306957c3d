from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .shard import Shard

GA = 0xACD5AD43274593B9
GB = 0x6956AB76ED268A3D
U64_MASK = (1 << 64) - 1


@dataclass(slots=True)
class ShardGenerator:
    """
    Per-shard permutation state for a single table build.

    Candidate slots follow ``position = position * step_mult + step_add``
    modulo the table size. With a power-of-two table, an odd ``step_add``
    and ``step_mult % 4 == 1`` this recurrence has full period, so every
    slot is visited exactly once before any repeats.
    """

    stable_index: int  # 1-based position in the caller's shard list
    shard_hash: int
    weight: float
    start: int
    step_add: int
    step_mult: int
    position: int = 0
    quota: int = 0
    weight_accumulator: float = 0.0

    def next_candidate(self, mask: int) -> int:
        candidate = (self.start + self.position) & mask
        self.position = (self.position * self.step_mult + self.step_add) & mask
        return candidate


def scramble(value: int) -> int:
    return (value * GA + GB) & U64_MASK


def create_generator(
    index: int,
    shard: Shard,
    table_size: int,
) -> ShardGenerator:
    # Projects a u64 onto [0, table_size) using its high bits.
    highbits = U64_MASK // table_size + 1

    shard_hash = shard.hash & U64_MASK

    value = scramble(shard_hash)
    start = value // highbits

    value = scramble(value)
    step_add = (value // highbits) | 1

    value = scramble(value)
    step_mult = ((value // highbits) & ~3) | 5

    return ShardGenerator(
        stable_index=index + 1,
        shard_hash=shard_hash,
        weight=float(shard.weight),
        start=start,
        step_add=step_add,
        step_mult=step_mult,
    )


def create_generators(
    shards: Sequence[Shard],
    table_size: int,
) -> list[ShardGenerator]:
    """
    Create one generator per shard, ordered by shard hash.

    The hash ordering makes the build independent of the order the
    caller lists shards in. Shards with equal hashes keep their input
    order, but callers should pass distinct hashes.
    """
    generators = [
        create_generator(index, shard, table_size)
        for index, shard in enumerate(shards)
    ]

    generators.sort(key=lambda generator: generator.shard_hash)

    return generators

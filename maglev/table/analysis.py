from typing import Sequence


def slot_distribution(table: Sequence[int], shard_count: int) -> list[int]:
    counts = [0] * shard_count
    for shard_index in table:
        counts[shard_index] += 1

    return counts


def count_movements(previous: Sequence[int], current: Sequence[int]) -> int:
    """Count slots whose owning shard differs between two tables."""
    if len(previous) != len(current):
        raise ValueError(
            f"Tables differ in size ({len(previous)} != {len(current)}), "
            "table size must be constant across rebuilds"
        )

    return sum(
        1 for previous_index, current_index in zip(previous, current)
        if previous_index != current_index
    )

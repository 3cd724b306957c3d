import itertools
from typing import Sequence

from .generator import ShardGenerator

UNCLAIMED = 0


def place_slots(
    generators: Sequence[ShardGenerator],
    table_size: int,
) -> list[int]:
    """
    Claim slots round-robin, one per generator per turn.

    Each turn a generator with quota left walks its own permutation to
    the first unclaimed slot and tags it with its 1-based stable index.
    Quotas must sum to ``table_size``.
    """
    slots = [UNCLAIMED] * table_size
    mask = table_size - 1

    claimed = 0
    for generator in itertools.cycle(generators):
        if claimed == table_size:
            break

        if generator.quota == 0:
            continue

        generator.quota -= 1

        candidate = generator.next_candidate(mask)
        while slots[candidate] != UNCLAIMED:
            candidate = generator.next_candidate(mask)

        slots[candidate] = generator.stable_index
        claimed += 1

    return slots


def finalize_table(slots: Sequence[int]) -> tuple[int, ...]:
    # Stable indices are 1-based so that 0 can mark unclaimed slots.
    return tuple(slot - 1 for slot in slots)

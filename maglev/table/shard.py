from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Shard:
    """
    A weighted backend as seen by the table builder.

    ``hash`` is a caller-computed unsigned 64-bit value (of the shard's
    name or anything else stable). ``weight`` is relative: weights are
    normalized to their average, so 1.0, 0.9, 1.1 and 100, 90, 110
    produce the same table.
    """

    hash: int
    weight: float

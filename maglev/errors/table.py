"""
Exceptions raised while building Maglev lookup tables.

Two tiers exist. TableSizeViolation is a contract failure: the table size
is a cluster-wide constant, so retrying with the same arguments can never
succeed and callers should not handle it alongside ordinary input errors.
MaglevError and its subclasses describe bad shard input that the caller
can correct and resubmit.
"""


class TableSizeViolation(AssertionError):
    """
    Raised when the table size is not a positive power of two.

    Subclasses AssertionError rather than MaglevError so that
    ``except MaglevError`` handlers never mask a misconfigured cluster.
    """

    def __init__(self, table_size: object) -> None:
        self.table_size = table_size
        super().__init__(
            f"tableSize should be positive power of two, got {table_size!r}"
        )


class MaglevError(Exception):
    pass


class InvalidWeight(MaglevError, ValueError):
    """Raised when a shard weight is negative or not a finite number."""

    def __init__(self, index: int, weight: float) -> None:
        self.index = index
        self.weight = weight
        super().__init__(
            f"weight should be a non-negative finite number, shard {index} has {weight!r}"
        )


class NoPositiveWeight(MaglevError, ValueError):
    """Raised when no shard carries a positive weight."""

    def __init__(self, shard_count: int) -> None:
        self.shard_count = shard_count
        super().__init__(
            f"some weights should be positive, none of {shard_count} shards are"
        )

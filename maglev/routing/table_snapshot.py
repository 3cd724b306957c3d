from dataclasses import dataclass

from maglev.table import Shard, Table


@dataclass(slots=True, frozen=True)
class TableSnapshot:
    """An immutable published table together with the shards it indexes."""

    table: Table
    shards: tuple[Shard, ...]
    table_size: int
    version: int

    def lookup(self, item_hash: int) -> int:
        # table_size is a power of two, so masking equals modulo.
        return self.table[item_hash & (self.table_size - 1)]

    def lookup_shard(self, item_hash: int) -> Shard:
        return self.shards[self.lookup(item_hash)]

"""
Weighted Maglev consistent hashing.

Builds fixed-size, power-of-two lookup tables mapping slots to weighted
shards, so that ``table[item_hash % table_size]`` picks a shard in O(1)
and small weight or membership changes move few slots. Hashing shards
and items is left to the caller.

    table_size = 1 << 20
    shards = [
        Shard(hash=myhash("shard1", seed), weight=0.5),
        Shard(hash=myhash("shard2", seed), weight=1),
        Shard(hash=myhash("shard3", seed), weight=2.1),
    ]
    table = build_table(shards, table_size)

    shard = shards[table[myhash("picture1", item_seed) % table_size]]
"""

from .env import Env, load_env
from .errors import InvalidWeight, MaglevError, NoPositiveWeight, TableSizeViolation
from .routing import MaglevRouter, TableSnapshot
from .table import Shard, Table, build_table, count_movements, slot_distribution

__all__ = [
    "Env",
    "InvalidWeight",
    "MaglevError",
    "MaglevRouter",
    "NoPositiveWeight",
    "Shard",
    "Table",
    "TableSizeViolation",
    "TableSnapshot",
    "build_table",
    "count_movements",
    "load_env",
    "slot_distribution",
]

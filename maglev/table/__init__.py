from .analysis import count_movements, slot_distribution
from .build_table import Table, build_table, validate_table_size
from .generator import GA, GB, ShardGenerator, create_generator, create_generators
from .placement import UNCLAIMED, finalize_table, place_slots
from .quota import Apportionment, allocate_quotas, average_weight
from .shard import Shard

__all__ = [
    "Apportionment",
    "GA",
    "GB",
    "Shard",
    "ShardGenerator",
    "Table",
    "UNCLAIMED",
    "allocate_quotas",
    "average_weight",
    "build_table",
    "count_movements",
    "create_generator",
    "create_generators",
    "finalize_table",
    "place_slots",
    "slot_distribution",
    "validate_table_size",
]

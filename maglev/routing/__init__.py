from .maglev_router import MaglevRouter
from .table_snapshot import TableSnapshot

__all__ = [
    "MaglevRouter",
    "TableSnapshot",
]

from .table import (
    InvalidWeight,
    MaglevError,
    NoPositiveWeight,
    TableSizeViolation,
)

__all__ = [
    "InvalidWeight",
    "MaglevError",
    "NoPositiveWeight",
    "TableSizeViolation",
]

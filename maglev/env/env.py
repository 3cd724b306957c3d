from typing import Callable, Dict, Literal, Union

from pydantic import BaseModel, StrictInt, StrictStr, field_validator

from maglev.table.quota import Apportionment

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    MAGLEV_TABLE_SIZE: StrictInt = 1 << 16
    MAGLEV_APPORTIONMENT: Apportionment = "accumulate"
    MAGLEV_LOG_LEVEL: StrictStr = "info"
    MAGLEV_LOG_OUTPUT: Literal["stdout", "stderr"] = "stderr"
    MAGLEV_LOG_PATH: StrictStr | None = None

    @field_validator("MAGLEV_TABLE_SIZE")
    @classmethod
    def validate_table_size(cls, table_size: int) -> int:
        # Lookups mask item hashes with table_size - 1.
        if table_size <= 0 or table_size & (table_size - 1) != 0:
            raise ValueError(
                f"MAGLEV_TABLE_SIZE must be a positive power of two, got {table_size}"
            )

        return table_size

    @classmethod
    def types_map(self) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "MAGLEV_TABLE_SIZE": int,
            "MAGLEV_APPORTIONMENT": str,
            "MAGLEV_LOG_LEVEL": str,
            "MAGLEV_LOG_OUTPUT": str,
            "MAGLEV_LOG_PATH": str,
        }

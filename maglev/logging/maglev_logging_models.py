from .models import Entry, LogLevel


class TableBuildDebug(Entry, kw_only=True):
    table_size: int
    shard_count: int
    apportionment: str
    quotas: list[int]
    level: LogLevel = LogLevel.DEBUG


class TableBuildInfo(Entry, kw_only=True):
    table_size: int
    shard_count: int
    apportionment: str
    level: LogLevel = LogLevel.INFO


class TableBuildError(Entry, kw_only=True):
    table_size: int
    shard_count: int
    error: str
    level: LogLevel = LogLevel.ERROR


class RouterInfo(Entry, kw_only=True):
    version: int
    table_size: int
    shard_count: int
    moved_slots: int
    level: LogLevel = LogLevel.INFO

from .config import LoggingConfig
from .models import Entry, Log, LogLevel, LogLevelName
from .streams import LoggerStream

__all__ = [
    "Entry",
    "Log",
    "LogLevel",
    "LogLevelName",
    "LoggerStream",
    "LoggingConfig",
]

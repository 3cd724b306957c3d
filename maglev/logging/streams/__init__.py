from .logger_stream import LoggerStream

__all__ = [
    "LoggerStream",
]

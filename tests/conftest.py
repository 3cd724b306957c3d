"""
Pytest configuration for maglev tests.

Configures pytest-asyncio markers and provides shared shard fixtures.
"""

from typing import Callable

import pytest

from maglev.logging import LoggingConfig
from maglev.table import Shard

U64_MASK = (1 << 64) - 1


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


def fnv_hash(name: str) -> int:
    value = 0x53F8E9
    for byte in name.encode():
        value = ((value ^ byte) * 0x315785) & U64_MASK

    return value


@pytest.fixture
def shard_hash() -> Callable[[str], int]:
    return fnv_hash


@pytest.fixture
def make_shards() -> Callable[..., list[Shard]]:
    def create_shards(*weights: float, prefix: str = "shard") -> list[Shard]:
        return [
            Shard(hash=fnv_hash(f"{prefix}{position}"), weight=weight)
            for position, weight in enumerate(weights, start=1)
        ]

    return create_shards


@pytest.fixture(autouse=True)
def reset_logging_config():
    yield
    LoggingConfig().update(
        log_level="info",
        log_output="stderr",
        disabled_loggers=[],
    )

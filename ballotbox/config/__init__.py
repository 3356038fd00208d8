"""Configuration for Ballotbox."""

from ballotbox.config.election_config import (
    DEFAULT_ELECTION_CONFIG,
    TEST_ELECTION_CONFIG,
    ElectionConfig,
)

__all__ = [
    "DEFAULT_ELECTION_CONFIG",
    "TEST_ELECTION_CONFIG",
    "ElectionConfig",
]

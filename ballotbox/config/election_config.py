"""Election configuration.

The owner identity is injected here rather than hardcoded, so every
privileged call compares against configuration.

Environment Variables:
- ELECTION_OWNER_IDENTITY: Administrative principal (default: "owner")
- ENVIRONMENT: "production" (JSON logs) or "development" (default: production)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

OWNER_IDENTITY_ENV = "ELECTION_OWNER_IDENTITY"
ENVIRONMENT_ENV = "ENVIRONMENT"

DEFAULT_OWNER_IDENTITY = "owner"
DEFAULT_ENVIRONMENT = "production"

VALID_ENVIRONMENTS: frozenset[str] = frozenset({"production", "development", "test"})


def _get_str_env(key: str, default: str) -> str:
    """Get string environment variable with default.

    Blank values count as unset.
    """
    value = os.environ.get(key)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass(frozen=True)
class ElectionConfig:
    """Configuration for the hosted election.

    Attributes:
        owner_identity: Identity of the administrative principal.
        environment: Deployment environment; selects log rendering.
    """

    owner_identity: str = DEFAULT_OWNER_IDENTITY
    environment: str = DEFAULT_ENVIRONMENT

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.owner_identity or not self.owner_identity.strip():
            raise ValueError("owner_identity must be a non-empty string")
        if self.environment not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {sorted(VALID_ENVIRONMENTS)}, "
                f"got {self.environment!r}"
            )

    @classmethod
    def from_environment(cls) -> ElectionConfig:
        """Create config from environment variables with defaults."""
        return cls(
            owner_identity=_get_str_env(OWNER_IDENTITY_ENV, DEFAULT_OWNER_IDENTITY),
            environment=_get_str_env(ENVIRONMENT_ENV, DEFAULT_ENVIRONMENT).lower(),
        )


DEFAULT_ELECTION_CONFIG = ElectionConfig()

TEST_ELECTION_CONFIG = ElectionConfig(
    owner_identity="test-owner",
    environment="test",
)

# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for IAM token auth and pool wiring
# CREATED: 17 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides sensible defaults for RDS IAM authentication.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class RdsIamDefaults:
    """
    Defaults for RDS IAM token generation.

    region_override_env names the variable consulted at the start of
    every region resolution. It wins over any configured region.
    """
    default_port: int = 5432
    region_override_env: str = "RDS_IAM_REGION_OVERRIDE"

    # Prefixes stripped before URL parsing (pool configuration style)
    url_prefixes: Tuple[str, ...] = ("jdbc:",)

    # boto3 service used for token signing
    token_service: str = "rds"

    # Tokens are only accepted over TLS
    sslmode: str = "require"

    @classmethod
    def from_env(cls) -> "RdsIamDefaults":
        """Create from environment variables."""
        return cls(
            default_port=int(os.getenv("RDS_IAM_DEFAULT_PORT", 5432)),
            region_override_env=os.getenv(
                "RDS_IAM_REGION_OVERRIDE_ENV", "RDS_IAM_REGION_OVERRIDE"
            ),
            sslmode=os.getenv("RDS_IAM_SSLMODE", "require"),
        )


@dataclass(frozen=True)
class PoolDefaults:
    """Defaults for the psycopg connection pool fed by IAM tokens."""
    min_size: int = 1
    max_size: int = 10
    timeout_seconds: float = 30.0

    # RDS IAM tokens are valid for 15 minutes; connections outlive them fine,
    # only new physical connections need a token.
    max_lifetime_seconds: float = 3600.0

    @classmethod
    def from_env(cls) -> "PoolDefaults":
        """Create from environment variables."""
        return cls(
            min_size=int(os.getenv("RDS_IAM_POOL_MIN_SIZE", 1)),
            max_size=int(os.getenv("RDS_IAM_POOL_MAX_SIZE", 10)),
            timeout_seconds=float(os.getenv("RDS_IAM_POOL_TIMEOUT", 30.0)),
            max_lifetime_seconds=float(os.getenv("RDS_IAM_POOL_MAX_LIFETIME", 3600.0)),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    rds_iam: RdsIamDefaults = field(default_factory=RdsIamDefaults)
    pool: PoolDefaults = field(default_factory=PoolDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            rds_iam=RdsIamDefaults.from_env(),
            pool=PoolDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "RdsIamDefaults",
    "PoolDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]

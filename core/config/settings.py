# ============================================================================
# RDS IAM SETTINGS
# ============================================================================
# STATUS: Core - Environment-based configuration
# PURPOSE: Connection descriptor and pool settings loaded once at startup
# CREATED: 17 OCT 2026
# ============================================================================
"""
RDS IAM Settings

Loads configuration from environment variables with sensible defaults.
Values are read once at startup and never mutated afterwards; the token
supplier only ever reads them.

Environment Variables:
---------------------
RDS_IAM_URL=postgresql://<host>:5432/<db>   (a jdbc: prefix is accepted)
RDS_IAM_USERNAME=<iam-db-user>
RDS_IAM_REGION=<region>                      (optional explicit region)
RDS_IAM_SSLMODE=require
RDS_IAM_POOL_MIN_SIZE / RDS_IAM_POOL_MAX_SIZE / RDS_IAM_POOL_TIMEOUT

The region override (RDS_IAM_REGION_OVERRIDE) is NOT read here: it is
looked up on every token request so that changing it takes effect without
a restart.
"""

import os
from dataclasses import dataclass
from typing import Callable, Optional

from core.config.defaults import PoolDefaults, RdsIamDefaults
from core.models import ConnectionDescriptor


@dataclass(frozen=True)
class RdsIamSettings:
    """Configuration for an IAM-authenticated connection pool."""

    url: str = ""
    username: str = ""
    region: Optional[str] = None
    sslmode: str = "require"

    # Pool sizing
    pool_min_size: int = 1
    pool_max_size: int = 10
    pool_timeout: float = 30.0
    pool_max_lifetime: float = 3600.0

    @classmethod
    def from_env(cls) -> "RdsIamSettings":
        """Load configuration from environment variables."""
        rds_defaults = RdsIamDefaults.from_env()
        pool_defaults = PoolDefaults.from_env()
        return cls(
            url=os.environ.get("RDS_IAM_URL", ""),
            username=os.environ.get("RDS_IAM_USERNAME", ""),
            region=os.environ.get("RDS_IAM_REGION") or None,
            sslmode=rds_defaults.sslmode,
            pool_min_size=pool_defaults.min_size,
            pool_max_size=pool_defaults.max_size,
            pool_timeout=pool_defaults.timeout_seconds,
            pool_max_lifetime=pool_defaults.max_lifetime_seconds,
        )

    def descriptor(self) -> ConnectionDescriptor:
        """Connection descriptor handed to the token supplier."""
        return ConnectionDescriptor(url=self.url, username=self.username)

    def region_accessor(self) -> Optional[Callable[[], Optional[str]]]:
        """Explicit region accessor, or None when no region is configured."""
        if not self.region:
            return None
        region = self.region
        return lambda: region

    @property
    def has_url(self) -> bool:
        """Check if a connection URL is configured."""
        return bool(self.url)


__all__ = [
    "RdsIamSettings",
]

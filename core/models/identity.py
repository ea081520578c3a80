# ============================================================================
# IDENTITY CONTEXT MODELS
# ============================================================================
# STATUS: Core - Per-request resolved identity
# PURPOSE: Region and credentials resolved for one token request
# CREATED: 17 OCT 2026
# ============================================================================
"""
Identity Context Models

Everything the token pipeline resolves before asking the backend for a
token. Rebuilt from scratch on every request and never cached.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class RegionSource(str, Enum):
    """Where the resolved region came from."""
    OVERRIDE = "override"            # Process environment override variable
    ACCESSOR = "accessor"            # Caller-configured region accessor
    DEFAULT_CHAIN = "default_chain"  # boto3 default region provider chain


class ResolvedRegion(BaseModel):
    """A region code plus the source that produced it."""

    region: str = Field(min_length=1)
    source: RegionSource

    model_config = {"frozen": True}


class IdentityContext(BaseModel):
    """
    Resolved identity for a single token request.

    credentials is the opaque handle from the default credentials chain.
    It is excluded from repr and serialization so that logging or dumping
    the context never leaks key material.
    """

    host: str
    port: int
    region: str
    region_source: RegionSource
    username: str
    database: Optional[str] = None
    credentials: Any = Field(default=None, exclude=True, repr=False)

    model_config = {"frozen": True}

    def to_status(self) -> Dict[str, Any]:
        """Secret-free summary for diagnostics and health checks."""
        return {
            "host": self.host,
            "port": self.port,
            "region": self.region,
            "region_source": self.region_source.value,
            "username": self.username,
            "database": self.database,
        }

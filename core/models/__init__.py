# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for all Pydantic models
# CREATED: 17 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

All Pydantic models for the RDS IAM token supplier.
"""

from core.models.target import ConnectionDescriptor, ParsedTarget
from core.models.identity import IdentityContext, RegionSource, ResolvedRegion

__all__ = [
    # Target
    "ConnectionDescriptor",
    "ParsedTarget",
    # Identity
    "IdentityContext",
    "RegionSource",
    "ResolvedRegion",
]

# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export models and error types shared by all components
# CREATED: 17 OCT 2026
# ============================================================================

from core.errors import (
    TokenSupplierError,
    MalformedTargetError,
    EmptyUsernameError,
    RegionUnresolvedError,
    CredentialsUnavailableError,
    TokenGenerationError,
)
from core.models import (
    ConnectionDescriptor,
    ParsedTarget,
    IdentityContext,
    RegionSource,
    ResolvedRegion,
)

__all__ = [
    # Errors
    "TokenSupplierError",
    "MalformedTargetError",
    "EmptyUsernameError",
    "RegionUnresolvedError",
    "CredentialsUnavailableError",
    "TokenGenerationError",
    # Models
    "ConnectionDescriptor",
    "ParsedTarget",
    "IdentityContext",
    "RegionSource",
    "ResolvedRegion",
]

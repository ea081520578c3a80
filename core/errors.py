# ============================================================================
# TOKEN SUPPLIER ERRORS
# ============================================================================
# STATUS: Core - Closed set of failure kinds
# PURPOSE: Typed failures for the RDS IAM token pipeline
# CREATED: 17 OCT 2026
# ============================================================================
"""
Token Supplier Errors

Every failure the token pipeline can raise, in priority order:

1. MalformedTargetError        - connection URL has no parsable host/port
2. EmptyUsernameError          - username blank at call time
3. RegionUnresolvedError       - no region from override, accessor or chain
4. CredentialsUnavailableError - default credentials chain produced nothing
5. TokenGenerationError        - backend refused or failed the signing call

Callers catch TokenSupplierError for "any auth failure" or a specific
subclass to react to one kind.
"""

from typing import Optional


class TokenSupplierError(Exception):
    """Base exception for token supplier failures."""

    def __init__(self, message: str, field: str = None, detail: str = None):
        self.field = field
        self.detail = detail
        super().__init__(message)


class MalformedTargetError(TokenSupplierError):
    """Raised when the connection URL cannot yield a host or port."""

    def __init__(self, field: str, url: Optional[str] = None, detail: str = None):
        message = f"Connection URL is missing a valid {field}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, field=field, detail=detail)
        # Raw URL kept for callers only, never put in the message
        self.url = url


class EmptyUsernameError(TokenSupplierError):
    """Raised when no database username is configured."""

    def __init__(self):
        super().__init__(
            "Database username is empty; set a username before requesting a token",
            field="username",
        )


class RegionUnresolvedError(TokenSupplierError):
    """Raised when override, accessor and default chain all yield nothing."""

    def __init__(self, detail: str = None):
        message = (
            "Unable to resolve AWS region from override, configured accessor "
            "or default region provider chain"
        )
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, field="region", detail=detail)


class CredentialsUnavailableError(TokenSupplierError):
    """Raised when the default credentials chain cannot produce credentials."""

    def __init__(self, detail: str):
        super().__init__(detail, field="credentials", detail=detail)


class TokenGenerationError(TokenSupplierError):
    """Raised when the backend fails to sign an authentication token."""

    def __init__(self, detail: str):
        super().__init__(detail, field="token", detail=detail)


__all__ = [
    "TokenSupplierError",
    "MalformedTargetError",
    "EmptyUsernameError",
    "RegionUnresolvedError",
    "CredentialsUnavailableError",
    "TokenGenerationError",
]

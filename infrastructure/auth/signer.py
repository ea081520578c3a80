# ============================================================================
# TOKEN REQUESTOR
# ============================================================================
# STATUS: Infrastructure - RDS auth token signing
# PURPOSE: One signed IAM auth token per call, no client reuse
# CREATED: 17 OCT 2026
# ============================================================================
"""
Token Requestor

Builds an RDS client scoped to the resolved region and credentials, then
asks it for a single IAM authentication token. Both the client and the
token are per-call; nothing is cached or retried here.

Resolving the frozen credentials is the only credential failure point
while building the client. Anything else that goes wrong while building
the client (an unsupported region code, an unknown service) or while
signing is a token generation failure.
"""

from typing import Any, Callable

import boto3

from core.errors import CredentialsUnavailableError, TokenGenerationError

ClientFactory = Callable[[str, Any], Any]


def default_client_factory(region: str, credentials: Any, service: str = "rds") -> Any:
    """
    RDS client bound to exactly these credentials and region.

    Raises:
        CredentialsUnavailableError: The credentials could not be resolved
            or refreshed.
    """
    try:
        frozen = credentials.get_frozen_credentials()
    except Exception as e:
        raise CredentialsUnavailableError(str(e) or type(e).__name__) from e

    session = boto3.session.Session(
        aws_access_key_id=frozen.access_key,
        aws_secret_access_key=frozen.secret_key,
        aws_session_token=frozen.token,
        region_name=region,
    )
    return session.client(service, region_name=region)


def request_token(
    host: str,
    port: int,
    region: str,
    username: str,
    credentials: Any,
    client_factory: ClientFactory = default_client_factory,
) -> str:
    """
    Request one IAM authentication token.

    Args:
        host: Database hostname
        port: Database port
        region: Region the token is signed for
        username: Database user
        credentials: Opaque handle from the credentials chain
        client_factory: Builds the backend client from (region, credentials)

    Returns:
        The token string, unchanged.

    Raises:
        CredentialsUnavailableError: The factory could not resolve credentials.
        TokenGenerationError: Any other client construction failure, a
            backend failure, or an empty token.
    """
    try:
        client = client_factory(region, credentials)
    except CredentialsUnavailableError:
        raise
    except Exception as e:
        raise TokenGenerationError(str(e) or type(e).__name__) from e

    try:
        token = client.generate_db_auth_token(
            DBHostname=host,
            Port=port,
            DBUsername=username,
            Region=region,
        )
    except Exception as e:
        raise TokenGenerationError(str(e) or type(e).__name__) from e

    if not token:
        raise TokenGenerationError("Token backend returned an empty token")

    return token


__all__ = [
    "ClientFactory",
    "default_client_factory",
    "request_token",
]

# ============================================================================
# CREDENTIALS LOADER
# ============================================================================
# STATUS: Infrastructure - AWS default credentials chain
# PURPOSE: Fresh credentials handle per token request
# CREATED: 17 OCT 2026
# ============================================================================
"""
Credentials Loader

Obtains a credentials handle from the boto3 default credentials chain
(environment, shared credentials/config files, web identity, container
and instance metadata). The handle is opaque to this package: it is
passed through to the token requestor and never inspected or logged.
"""

from typing import Any, Callable

import boto3

from core.errors import CredentialsUnavailableError

CredentialsFactory = Callable[[], Any]

NO_CREDENTIALS_MESSAGE = "No AWS credentials found in the default credentials chain"


def load_default_credentials() -> Any:
    """Credentials from a fresh boto3 session; None when nothing is found."""
    return boto3.session.Session().get_credentials()


def obtain_credentials(factory: CredentialsFactory = load_default_credentials) -> Any:
    """
    Run the credentials factory once.

    Raises:
        CredentialsUnavailableError: The factory raised (original message
            kept verbatim, original exception chained) or returned None.
    """
    try:
        credentials = factory()
    except CredentialsUnavailableError:
        raise
    except Exception as e:
        raise CredentialsUnavailableError(str(e) or type(e).__name__) from e

    if credentials is None:
        raise CredentialsUnavailableError(NO_CREDENTIALS_MESSAGE)

    return credentials


__all__ = [
    "CredentialsFactory",
    "NO_CREDENTIALS_MESSAGE",
    "load_default_credentials",
    "obtain_credentials",
]

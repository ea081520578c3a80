# ============================================================================
# CONNECTION URL PARSER
# ============================================================================
# STATUS: Infrastructure - Descriptor parsing
# PURPOSE: Extract host/port from a pool connection URL
# CREATED: 17 OCT 2026
# ============================================================================
"""
Connection URL Parser

Turns the configured connection URL into a ParsedTarget:

    jdbc:postgresql://user:pw@db.example.com:6543/app
        -> host=db.example.com, port=6543, database=app
        -> sanitized_url=postgresql://db.example.com:6543/app

The pool-configuration prefix (jdbc:) is stripped first. User info is
dropped and never reaches the sanitized URL. Port defaults to 5432.
"""

from typing import Iterable
from urllib.parse import urlsplit

from core.errors import MalformedTargetError
from core.models import ParsedTarget

DEFAULT_PORT = 5432
URL_PREFIXES = ("jdbc:",)


def strip_url_prefix(url: str, prefixes: Iterable[str] = URL_PREFIXES) -> str:
    """Remove a pool-configuration prefix such as 'jdbc:'."""
    for prefix in prefixes:
        if url[:len(prefix)].lower() == prefix.lower():
            return url[len(prefix):]
    return url


def _split_authority(netloc: str) -> str:
    """Host part of host[:port], user info dropped, case preserved."""
    authority = netloc.rpartition("@")[2]
    if authority.startswith("["):
        return authority[1:authority.find("]")]
    return authority.partition(":")[0]


def parse_connection_url(
    url: str,
    default_port: int = DEFAULT_PORT,
    prefixes: Iterable[str] = URL_PREFIXES,
) -> ParsedTarget:
    """
    Parse a connection URL into host, port and database.

    Pure function: the same URL always yields an equal ParsedTarget.

    Args:
        url: Connection URL in scheme://host[:port]/database form
        default_port: Port used when the URL has none
        prefixes: Prefixes stripped before parsing

    Returns:
        ParsedTarget

    Raises:
        MalformedTargetError: No parsable hostname, or an invalid port.
    """
    if not url or not url.strip():
        raise MalformedTargetError("hostname", url=url, detail="connection URL is empty")

    stripped = strip_url_prefix(url.strip(), prefixes)
    if "://" not in stripped:
        raise MalformedTargetError(
            "hostname",
            url=url,
            detail="expected scheme://host[:port]/database",
        )

    try:
        parts = urlsplit(stripped)
    except ValueError as e:
        raise MalformedTargetError("hostname", url=url, detail=str(e)) from e

    host = _split_authority(parts.netloc)
    if not host or not parts.hostname:
        raise MalformedTargetError("hostname", url=url)

    try:
        port = parts.port
    except ValueError as e:
        raise MalformedTargetError("port", url=url, detail=str(e)) from e

    if port is None:
        port = default_port
    if not 1 <= port <= 65535:
        raise MalformedTargetError("port", url=url, detail="port must be between 1 and 65535")

    database = parts.path.lstrip("/").split("/")[0] or None

    return ParsedTarget(
        scheme=parts.scheme or "postgresql",
        host=host,
        port=port,
        database=database,
    )


__all__ = [
    "DEFAULT_PORT",
    "URL_PREFIXES",
    "strip_url_prefix",
    "parse_connection_url",
]

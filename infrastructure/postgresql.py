# ============================================================================
# POSTGRESQL CONNECTION INFRASTRUCTURE
# ============================================================================
# STATUS: Infrastructure - PostgreSQL connection handling
# PURPOSE: Connection pool that authenticates with RDS IAM tokens
# CREATED: 17 OCT 2026
# ============================================================================
"""
PostgreSQL Connection Infrastructure

Wires the RDS IAM token supplier into psycopg:
- iam_connection_class: Connection subclass asking the supplier for a
  password on every new physical connection
- create_iam_pool: psycopg_pool.ConnectionPool using that class
- PostgreSQLRepository: context managers and query helpers over the pool

The password never appears in the conninfo string. It is injected per
connect() call, so each physical connection gets its own fresh token
and the pool's own retry/backoff governs failed attempts.
"""

from contextlib import contextmanager
from typing import Any, Callable, Dict, Optional, Type

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from core.config.settings import RdsIamSettings
from core.logging import ComponentType, get_logger
from core.models import ParsedTarget
from infrastructure.auth import RdsIamTokenSupplier

logger = get_logger(__name__, ComponentType.POOL)

PasswordSupplier = Callable[[], str]


def iam_connection_class(
    supplier: PasswordSupplier,
    base: Type[psycopg.Connection] = psycopg.Connection,
) -> Type[psycopg.Connection]:
    """
    Build a Connection subclass that takes its password from supplier.

    supplier is called once per connect(); a failure there fails that
    connection attempt with the supplier's own error.
    """

    class IamAuthConnection(base):
        @classmethod
        def connect(cls, conninfo: str = "", **kwargs: Any):
            kwargs["password"] = supplier()
            return super().connect(conninfo, **kwargs)

    return IamAuthConnection


def build_conninfo(
    target: ParsedTarget,
    username: str,
    sslmode: str = "require",
) -> str:
    """libpq conninfo for target without any password."""
    return make_conninfo(
        host=target.host,
        port=target.port,
        dbname=target.database,
        user=username,
        sslmode=sslmode,
    )


def create_iam_pool(
    settings: Optional[RdsIamSettings] = None,
    supplier: Optional[RdsIamTokenSupplier] = None,
    open: bool = False,
    **pool_kwargs: Any,
) -> ConnectionPool:
    """
    Create a connection pool authenticating with IAM tokens.

    Args:
        settings: Pool and descriptor settings (environment by default)
        supplier: Token supplier (built from settings by default)
        open: Open the pool immediately
        **pool_kwargs: Extra ConnectionPool arguments

    Raises:
        MalformedTargetError: The configured URL has no usable host/port.
    """
    settings = settings or RdsIamSettings.from_env()
    supplier = supplier or RdsIamTokenSupplier.from_settings(settings)

    target = supplier.parse_target()
    conninfo = build_conninfo(target, supplier.descriptor.username, settings.sslmode)

    logger.info(
        f"Creating IAM-authenticated pool for {target.sanitized_url} "
        f"(min={settings.pool_min_size}, max={settings.pool_max_size})"
    )

    pool_kwargs.setdefault("name", "rds-iam")
    return ConnectionPool(
        conninfo=conninfo,
        connection_class=iam_connection_class(supplier),
        kwargs={"row_factory": dict_row},
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        timeout=settings.pool_timeout,
        max_lifetime=settings.pool_max_lifetime,
        open=open,
        **pool_kwargs,
    )


# ============================================================================
# POSTGRESQL REPOSITORY
# ============================================================================

class PostgreSQLRepository:
    """
    Query helpers over an IAM-authenticated pool.

    Usage:
        repo = PostgreSQLRepository(create_iam_pool(open=True))
        row = repo.fetch_one("SELECT 1 AS ok")
    """

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    @contextmanager
    def get_connection(self):
        """
        Context manager for pooled connections.

        Yields:
            psycopg connection with dict_row factory
        """
        try:
            with self.pool.connection() as conn:
                yield conn
        except psycopg.Error as e:
            logger.error(f"PostgreSQL connection error: {e}")
            raise

    @contextmanager
    def get_cursor(self, conn=None):
        """
        Context manager for PostgreSQL cursors.

        Args:
            conn: Optional existing connection (for transactions)
        """
        if conn:
            with conn.cursor() as cursor:
                yield cursor
        else:
            with self.get_connection() as conn:
                with conn.cursor() as cursor:
                    yield cursor

    def execute(self, query: str, params: tuple = None) -> None:
        """Execute a query without returning results."""
        with self.get_cursor() as cur:
            cur.execute(query, params)

    def fetch_one(self, query: str, params: tuple = None) -> Optional[Dict[str, Any]]:
        """Execute query and fetch one result."""
        with self.get_cursor() as cur:
            cur.execute(query, params)
            return cur.fetchone()


__all__ = [
    "PasswordSupplier",
    "iam_connection_class",
    "build_conninfo",
    "create_iam_pool",
    "PostgreSQLRepository",
]

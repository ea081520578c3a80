# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - AWS auth and PostgreSQL pool wiring
# PURPOSE: IAM token supply and the connection pool that consumes it
# CREATED: 17 OCT 2026
# ============================================================================
"""
Infrastructure module.

Provides:
- RdsIamTokenSupplier: IAM auth token as a zero-argument password accessor
- create_iam_pool: psycopg_pool.ConnectionPool fed by the supplier
- PostgreSQLRepository: query helpers over the pool

Usage:
    from infrastructure import create_iam_pool, PostgreSQLRepository

    pool = create_iam_pool(open=True)
    repo = PostgreSQLRepository(pool)
    repo.fetch_one("SELECT 1")
"""

from infrastructure.auth import (
    RdsIamTokenSupplier,
    get_iam_auth_status,
)
from infrastructure.postgresql import (
    PostgreSQLRepository,
    build_conninfo,
    create_iam_pool,
    iam_connection_class,
)

__all__ = [
    # Auth
    "RdsIamTokenSupplier",
    "get_iam_auth_status",
    # PostgreSQL
    "PostgreSQLRepository",
    "build_conninfo",
    "create_iam_pool",
    "iam_connection_class",
]

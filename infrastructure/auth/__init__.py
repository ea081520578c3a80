# ============================================================================
# AUTHENTICATION MODULE
# ============================================================================
# STATUS: Infrastructure - RDS IAM authentication
# PURPOSE: IAM auth tokens as PostgreSQL passwords
# CREATED: 17 OCT 2026
# ============================================================================
"""
Authentication module.

Provides AWS RDS IAM authentication for PostgreSQL:
- RdsIamTokenSupplier: zero-argument password accessor for a pool
- get_iam_auth_status: pre-flight status for health checks

Usage:
    from infrastructure.auth import RdsIamTokenSupplier

    supplier = RdsIamTokenSupplier.from_settings()
    password = supplier()
"""

from infrastructure.auth.rds_iam_auth import (
    RdsIamTokenSupplier,
    get_iam_auth_status,
)
from infrastructure.auth.target import parse_connection_url
from infrastructure.auth.region import RegionResolver

__all__ = [
    'RdsIamTokenSupplier',
    'get_iam_auth_status',
    'parse_connection_url',
    'RegionResolver',
]

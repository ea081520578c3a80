# ============================================================================
# PRE-FLIGHT VALIDATION
# ============================================================================
# STATUS: Service - IAM auth pre-flight validation
# PURPOSE: Validate IAM auth configuration before the pool goes live
# CREATED: 17 OCT 2026
# ============================================================================
"""
Pre-flight Validation

Three-stage check of an IAM-authenticated database setup, each stage
run only when the previous one passed:

  Stage 1: Identity resolution (URL, username, region, credentials).
    No network call to RDS, no token signed.
  Stage 2 (optional): Sign one token. Still no database round-trip.
  Stage 3 (optional): Open one pooled connection and run SELECT 1.

Configuration smells that do not block a connection (region coming
from the ambient chain, a non-TLS sslmode) are reported as warnings.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.config.settings import RdsIamSettings
from core.errors import TokenSupplierError
from core.logging import ComponentType, get_logger
from core.models import RegionSource
from infrastructure.auth import RdsIamTokenSupplier
from infrastructure.postgresql import PostgreSQLRepository, create_iam_pool

logger = get_logger(__name__, ComponentType.TOOL)

# libpq sslmodes that never negotiate TLS; RDS rejects IAM tokens without it
NON_TLS_SSLMODES = ("disable", "allow")


# ============================================================================
# RESULT
# ============================================================================

@dataclass
class PreflightResult:
    """
    Result of pre-flight validation.

    details holds the secret-free identity summary and stage outcomes.
    """
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)


# ============================================================================
# VALIDATOR
# ============================================================================

class IamAuthPreflight:
    """
    Pre-flight validator for RDS IAM authentication.

    Args:
        supplier: Token supplier under test
        settings: Settings used for pool-level checks (sslmode, connect)
        pool_factory: Callable(settings, supplier) -> pool, used by the
            connect stage (default: infrastructure.postgresql.create_iam_pool)
    """

    def __init__(
        self,
        supplier: RdsIamTokenSupplier,
        settings: Optional[RdsIamSettings] = None,
        pool_factory=None,
    ):
        self.supplier = supplier
        self.settings = settings or RdsIamSettings()
        self.pool_factory = pool_factory or create_iam_pool

    def validate(self, sign_token: bool = False, connect: bool = False) -> PreflightResult:
        """
        Run pre-flight checks.

        Args:
            sign_token: Also sign one token (stage 2)
            connect: Also open one connection (stage 3, implies signing)

        Returns:
            PreflightResult with collected errors and warnings.
        """
        errors: List[str] = []
        warnings: List[str] = []
        details: Dict[str, Any] = {}

        if self.settings.sslmode in NON_TLS_SSLMODES:
            warnings.append(
                f"sslmode '{self.settings.sslmode}' does not use TLS; "
                "RDS rejects IAM tokens over unencrypted connections"
            )

        # 1. Identity
        try:
            context = self.supplier.resolve_identity_context()
        except TokenSupplierError as e:
            errors.append(f"{type(e).__name__}: {e}")
            return PreflightResult(valid=False, errors=errors, warnings=warnings, details=details)

        details.update(context.to_status())
        if context.region_source == RegionSource.DEFAULT_CHAIN:
            warnings.append(
                f"Region '{context.region}' came from the default provider chain; "
                "set RDS_IAM_REGION to pin it"
            )

        # 2. Token
        if sign_token or connect:
            try:
                token = self.supplier.supply_token()
                details["token_length"] = len(token)
            except TokenSupplierError as e:
                errors.append(f"{type(e).__name__}: {e}")

        # 3. Connection
        if connect and not errors:
            errors.extend(self._check_connection(details))

        return PreflightResult(
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            details=details,
        )

    def _check_connection(self, details: Dict[str, Any]) -> List[str]:
        """Open one pooled connection and run SELECT 1."""
        pool = self.pool_factory(self.settings, self.supplier)
        try:
            pool.open(wait=True, timeout=self.settings.pool_timeout)
            row = PostgreSQLRepository(pool).fetch_one("SELECT 1 AS health_check")
        except Exception as e:
            logger.error(f"Pre-flight connection failed: {type(e).__name__}: {e}")
            return [f"Connection failed: {type(e).__name__}: {e}"]
        finally:
            pool.close()

        if not row or row.get("health_check") != 1:
            return ["Connection query returned unexpected result"]

        details["connected"] = True
        return []


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PreflightResult",
    "IamAuthPreflight",
]

# ============================================================================
# RDS IAM TOKEN SUPPLIER
# ============================================================================
# STATUS: Infrastructure - Password accessor backed by IAM auth tokens
# PURPOSE: Supply a fresh RDS IAM auth token whenever the pool needs a password
# CREATED: 17 OCT 2026
# ============================================================================
"""
RDS IAM authentication for PostgreSQL connection pools.

Replaces a static database password with a short-lived IAM authentication
token. Every call builds everything from scratch; no token, client or
credentials handle outlives the call that created it.

Authentication Flow:
-------------------
1. Pool needs a new physical connection -> supplier() called
2. Connection URL parsed into host/port (sanitized target logged)
3. Username checked
4. Region resolved: override env var > configured region > boto3 chain
5. Credentials loaded from the boto3 default chain
6. RDS client built for region + credentials, token signed
7. Token returned as the password for this one connection attempt

Failures (first one wins, in this order):
    MalformedTargetError, EmptyUsernameError, RegionUnresolvedError,
    CredentialsUnavailableError, TokenGenerationError

Usage:
------
```python
from core.models import ConnectionDescriptor
from infrastructure.auth import RdsIamTokenSupplier

supplier = RdsIamTokenSupplier(
    ConnectionDescriptor(url="postgresql://db.example.com:5432/app", username="app_iam"),
)

token = supplier()                              # password for one connection
context = supplier.resolve_identity_context()   # pre-flight, no token
```
"""

from functools import partial
from typing import Any, Dict, Optional

from core.config.defaults import RdsIamDefaults
from core.config.settings import RdsIamSettings
from core.errors import EmptyUsernameError, TokenSupplierError
from core.logging import ComponentType, get_logger, log_checkpoint, log_context
from core.models import ConnectionDescriptor, IdentityContext, ParsedTarget
from infrastructure.auth.credentials import (
    CredentialsFactory,
    load_default_credentials,
    obtain_credentials,
)
from infrastructure.auth.region import RegionLookup, RegionResolver, env_override_lookup
from infrastructure.auth.signer import ClientFactory, default_client_factory, request_token
from infrastructure.auth.target import parse_connection_url

logger = get_logger(__name__, ComponentType.AUTH)


class RdsIamTokenSupplier:
    """
    Zero-argument password accessor for a connection pool.

    Safe to call from many pool threads at once: instances hold only
    configuration set in __init__, and every call works on locals.
    """

    def __init__(
        self,
        descriptor: ConnectionDescriptor,
        region_accessor: Optional[RegionLookup] = None,
        override_lookup: Optional[RegionLookup] = None,
        region_chain: Optional[RegionLookup] = None,
        credentials_factory: Optional[CredentialsFactory] = None,
        client_factory: Optional[ClientFactory] = None,
        defaults: Optional[RdsIamDefaults] = None,
    ):
        """
        Initialize the supplier.

        Args:
            descriptor: Connection URL and username
            region_accessor: Explicit region source, consulted after the override
            override_lookup: Region override source (default: env var)
            region_chain: Ambient region chain (default: boto3 chain)
            credentials_factory: Credentials chain (default: boto3 chain)
            client_factory: Builds the token backend from (region, credentials)
            defaults: Port, prefixes and override variable name
        """
        self._descriptor = descriptor
        self._defaults = defaults or RdsIamDefaults()
        self._region_resolver = RegionResolver(
            override_lookup=override_lookup or env_override_lookup(self._defaults.region_override_env),
            region_accessor=region_accessor,
            default_chain=region_chain,
        )
        self._credentials_factory = credentials_factory or load_default_credentials
        self._client_factory = client_factory or partial(
            default_client_factory, service=self._defaults.token_service
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[RdsIamSettings] = None,
        **kwargs: Any,
    ) -> "RdsIamTokenSupplier":
        """Build a supplier from RdsIamSettings (environment by default)."""
        settings = settings or RdsIamSettings.from_env()
        kwargs.setdefault("region_accessor", settings.region_accessor())
        return cls(settings.descriptor(), **kwargs)

    @property
    def descriptor(self) -> ConnectionDescriptor:
        return self._descriptor

    def __call__(self) -> str:
        return self.supply_token()

    def __repr__(self) -> str:
        return f"RdsIamTokenSupplier(username={self._descriptor.username!r})"

    # ================================================================
    # PIPELINE STEPS
    # ================================================================

    def parse_target(self) -> ParsedTarget:
        """Host, port and database from the configured URL."""
        return parse_connection_url(
            self._descriptor.url,
            default_port=self._defaults.default_port,
            prefixes=self._defaults.url_prefixes,
        )

    def _resolve(self) -> IdentityContext:
        logger.info("Credentials requested")

        target = self.parse_target()
        logger.info(f"Sanitized target: {target.sanitized_url}")

        username = self._descriptor.username
        if not username:
            raise EmptyUsernameError()

        resolved = self._region_resolver.resolve()
        logger.info(f"Resolved region: {resolved.region} (source={resolved.source.value})")

        credentials = obtain_credentials(self._credentials_factory)

        return IdentityContext(
            host=target.host,
            port=target.port,
            region=resolved.region,
            region_source=resolved.source,
            username=username,
            database=target.database,
            credentials=credentials,
        )

    # ================================================================
    # ENTRY POINTS
    # ================================================================

    def resolve_identity_context(self) -> IdentityContext:
        """
        Resolve host, port, region and credentials without signing a token.

        Used for pre-flight and diagnostic checks.

        Raises:
            TokenSupplierError subclass for the first failing step.
        """
        with log_context(operation="resolve_identity_context", username=self._descriptor.username or None):
            try:
                context = self._resolve()
            except TokenSupplierError as e:
                logger.error(f"Identity resolution failed: {type(e).__name__}: {e}")
                raise

            log_checkpoint("identity_resolved", {
                "host": context.host,
                "port": context.port,
                "region": context.region,
            })
            return context

    def supply_token(self) -> str:
        """
        Produce a fresh IAM authentication token for one connection attempt.

        Returns:
            Token string to use as the database password.

        Raises:
            TokenSupplierError subclass for the first failing step.
        """
        with log_context(operation="supply_token", username=self._descriptor.username or None):
            logger.info("Token requested")
            try:
                context = self._resolve()
                with log_context(host=context.host, region=context.region):
                    token = request_token(
                        host=context.host,
                        port=context.port,
                        region=context.region,
                        username=context.username,
                        credentials=context.credentials,
                        client_factory=self._client_factory,
                    )
            except TokenSupplierError as e:
                logger.error(f"PostgreSQL IAM token acquisition failed: {type(e).__name__}: {e}")
                raise

            log_checkpoint("token_supplied", {
                "host": context.host,
                "port": context.port,
                "region": context.region,
                "username": context.username,
            })
            return token


# ============================================================================
# STATUS
# ============================================================================

def get_iam_auth_status(supplier: RdsIamTokenSupplier) -> Dict[str, Any]:
    """
    IAM auth status for health checks.

    Runs identity resolution only; no token is signed.

    Returns:
        Dict with auth status information.
    """
    status: Dict[str, Any] = {"auth_type": "rds_iam"}
    try:
        context = supplier.resolve_identity_context()
    except TokenSupplierError as e:
        status.update({
            "ready": False,
            "error": f"{type(e).__name__}: {e}",
            "error_field": e.field,
        })
        return status

    status.update(context.to_status())
    status["ready"] = True
    return status


__all__ = [
    "RdsIamTokenSupplier",
    "get_iam_auth_status",
]

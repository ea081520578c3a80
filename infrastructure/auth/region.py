# ============================================================================
# REGION RESOLVER
# ============================================================================
# STATUS: Infrastructure - Region resolution with override precedence
# PURPOSE: Pick the AWS region a token is signed for
# CREATED: 17 OCT 2026
# ============================================================================
"""
Region Resolver

Resolution order, first non-empty value wins, nothing is merged:

1. Override lookup     (default: RDS_IAM_REGION_OVERRIDE env var)
2. Region accessor     (explicit region from configuration, optional)
3. Default chain       (boto3 session region, then instance metadata)

Resolution runs on every token request. A changed override is picked up
on the very next request.
"""

import os
from typing import Callable, Optional

import boto3
from botocore.utils import InstanceMetadataRegionFetcher

from core.config.defaults import RdsIamDefaults
from core.errors import RegionUnresolvedError
from core.logging import ComponentType, get_logger
from core.models import RegionSource, ResolvedRegion

logger = get_logger(__name__, ComponentType.AUTH)

RegionLookup = Callable[[], Optional[str]]


def env_override_lookup(env_var: Optional[str] = None) -> RegionLookup:
    """Build a lookup that reads the override variable at call time."""
    name = env_var or RdsIamDefaults().region_override_env

    def lookup() -> Optional[str]:
        return os.environ.get(name)

    return lookup


def default_region_chain() -> Optional[str]:
    """
    boto3 default region provider chain.

    The session covers AWS_DEFAULT_REGION and the shared config file.
    Instance metadata is tried last; it is skipped when
    AWS_EC2_METADATA_DISABLED=true.
    """
    region = boto3.session.Session().region_name
    if region:
        return region
    return InstanceMetadataRegionFetcher().retrieve_region()


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class RegionResolver:
    """
    Resolves a region from override, accessor and default chain.

    Holds only the three callables passed at construction.
    """

    def __init__(
        self,
        override_lookup: Optional[RegionLookup] = None,
        region_accessor: Optional[RegionLookup] = None,
        default_chain: Optional[RegionLookup] = None,
    ):
        self._override_lookup = override_lookup or env_override_lookup()
        self._region_accessor = region_accessor
        self._default_chain = default_chain or default_region_chain

    def resolve(self) -> ResolvedRegion:
        """
        Resolve the region for one request.

        Raises:
            RegionUnresolvedError: Every source came up empty, or the
                default chain itself failed.
        """
        override = _clean(self._override_lookup())
        if override:
            logger.info(f"Region override applied: {override}")
            return ResolvedRegion(region=override, source=RegionSource.OVERRIDE)

        if self._region_accessor is not None:
            explicit = _clean(self._region_accessor())
            if explicit:
                return ResolvedRegion(region=explicit, source=RegionSource.ACCESSOR)

        try:
            ambient = _clean(self._default_chain())
        except Exception as e:
            raise RegionUnresolvedError(f"{type(e).__name__}: {e}") from e

        if not ambient:
            raise RegionUnresolvedError()

        return ResolvedRegion(region=ambient, source=RegionSource.DEFAULT_CHAIN)


__all__ = [
    "RegionLookup",
    "RegionResolver",
    "env_override_lookup",
    "default_region_chain",
]

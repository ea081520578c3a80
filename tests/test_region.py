# ============================================================================
# REGION RESOLVER TESTS
# ============================================================================
# STATUS: Tests - Region precedence
# PURPOSE: Verify override > accessor > default chain and failure modes
# CREATED: 17 OCT 2026
# ============================================================================
"""
Region Resolver Tests

Run with:
    pytest tests/test_region.py -v
"""

import logging

import pytest
from unittest.mock import MagicMock, patch

from core.errors import RegionUnresolvedError
from core.models import RegionSource
from infrastructure.auth.region import (
    RegionResolver,
    default_region_chain,
    env_override_lookup,
)


# ============================================================================
# HELPERS
# ============================================================================

def _make_resolver(override=None, accessor=None, chain="us-east-1", chain_error=None,
                   with_accessor=True):
    """Resolver with plain-value sources; chain_error makes the chain raise."""
    default_chain = MagicMock(return_value=chain)
    if chain_error:
        default_chain.side_effect = chain_error
    resolver = RegionResolver(
        override_lookup=lambda: override,
        region_accessor=(lambda: accessor) if with_accessor else None,
        default_chain=default_chain,
    )
    return resolver, default_chain


# ============================================================================
# PRECEDENCE
# ============================================================================

class TestPrecedence:

    def test_override_wins_over_everything(self):
        resolver, chain = _make_resolver(
            override="us-west-2", accessor="eu-central-1", chain="ap-southeast-2"
        )
        resolved = resolver.resolve()
        assert resolved.region == "us-west-2"
        assert resolved.source == RegionSource.OVERRIDE
        chain.assert_not_called()

    def test_accessor_wins_over_chain(self):
        resolver, chain = _make_resolver(accessor="eu-central-1", chain="ap-southeast-2")
        resolved = resolver.resolve()
        assert resolved.region == "eu-central-1"
        assert resolved.source == RegionSource.ACCESSOR
        chain.assert_not_called()

    def test_chain_used_when_nothing_else(self):
        resolver, _ = _make_resolver(accessor=None, chain="ap-southeast-2")
        resolved = resolver.resolve()
        assert resolved.region == "ap-southeast-2"
        assert resolved.source == RegionSource.DEFAULT_CHAIN

    def test_no_accessor_configured(self):
        resolver, _ = _make_resolver(with_accessor=False, chain="ap-southeast-2")
        assert resolver.resolve().region == "ap-southeast-2"

    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_override_ignored(self, blank):
        resolver, _ = _make_resolver(override=blank, accessor="eu-central-1")
        assert resolver.resolve().region == "eu-central-1"

    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_accessor_ignored(self, blank):
        resolver, _ = _make_resolver(accessor=blank, chain="ap-southeast-2")
        assert resolver.resolve().source == RegionSource.DEFAULT_CHAIN

    def test_values_are_stripped(self):
        resolver, _ = _make_resolver(override=" us-west-2 ")
        assert resolver.resolve().region == "us-west-2"

    def test_override_logged(self, caplog):
        caplog.set_level(logging.INFO)
        resolver, _ = _make_resolver(override="us-west-2")
        resolver.resolve()
        assert any(
            "Region override applied: us-west-2" in r.getMessage() for r in caplog.records
        )


# ============================================================================
# FAILURES
# ============================================================================

class TestUnresolved:

    @pytest.mark.parametrize("empty", [None, ""])
    def test_chain_returns_nothing(self, empty):
        resolver, _ = _make_resolver(chain=empty)
        with pytest.raises(RegionUnresolvedError):
            resolver.resolve()

    def test_chain_raises(self):
        boom = RuntimeError("metadata service unreachable")
        resolver, _ = _make_resolver(chain_error=boom)
        with pytest.raises(RegionUnresolvedError) as exc_info:
            resolver.resolve()
        assert "metadata service unreachable" in str(exc_info.value)
        assert exc_info.value.__cause__ is boom


# ============================================================================
# ENVIRONMENT OVERRIDE
# ============================================================================

class TestEnvOverride:

    def test_reads_default_variable(self, monkeypatch):
        monkeypatch.setenv("RDS_IAM_REGION_OVERRIDE", "us-west-2")
        assert env_override_lookup()() == "us-west-2"

    def test_custom_variable(self, monkeypatch):
        monkeypatch.setenv("MY_REGION_OVERRIDE", "eu-west-3")
        assert env_override_lookup("MY_REGION_OVERRIDE")() == "eu-west-3"

    def test_read_on_every_call(self, monkeypatch):
        monkeypatch.delenv("RDS_IAM_REGION_OVERRIDE", raising=False)
        resolver = RegionResolver(
            override_lookup=env_override_lookup(),
            default_chain=lambda: "us-east-1",
        )
        assert resolver.resolve().region == "us-east-1"

        monkeypatch.setenv("RDS_IAM_REGION_OVERRIDE", "us-west-2")
        assert resolver.resolve().region == "us-west-2"

        monkeypatch.setenv("RDS_IAM_REGION_OVERRIDE", "eu-west-1")
        assert resolver.resolve().region == "eu-west-1"


# ============================================================================
# DEFAULT CHAIN
# ============================================================================

class TestDefaultChain:

    def test_session_region_used(self):
        with patch("infrastructure.auth.region.boto3.session.Session") as session_cls, \
             patch("infrastructure.auth.region.InstanceMetadataRegionFetcher") as fetcher_cls:
            session_cls.return_value.region_name = "eu-west-1"
            assert default_region_chain() == "eu-west-1"
            fetcher_cls.assert_not_called()

    def test_falls_back_to_instance_metadata(self):
        with patch("infrastructure.auth.region.boto3.session.Session") as session_cls, \
             patch("infrastructure.auth.region.InstanceMetadataRegionFetcher") as fetcher_cls:
            session_cls.return_value.region_name = None
            fetcher_cls.return_value.retrieve_region.return_value = "sa-east-1"
            assert default_region_chain() == "sa-east-1"

    def test_nothing_found(self):
        with patch("infrastructure.auth.region.boto3.session.Session") as session_cls, \
             patch("infrastructure.auth.region.InstanceMetadataRegionFetcher") as fetcher_cls:
            session_cls.return_value.region_name = None
            fetcher_cls.return_value.retrieve_region.return_value = None
            assert default_region_chain() is None

    def test_environment_region(self, monkeypatch):
        monkeypatch.delenv("AWS_PROFILE", raising=False)
        monkeypatch.setenv("AWS_DEFAULT_REGION", "ca-central-1")
        assert default_region_chain() == "ca-central-1"

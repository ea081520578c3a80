#!/usr/bin/env python3
# ============================================================================
# CLI IAM AUTH CHECK TOOL
# ============================================================================
# STATUS: Tool - Pre-flight check for RDS IAM authentication
# PURPOSE: Verify URL, region and credentials before starting the pool
# CREATED: 17 OCT 2026
# ============================================================================
"""
Check RDS IAM authentication configuration.

Runs the same pipeline the pool runs for every new connection, and reports
what it resolved. Tokens are never printed, only their length.

Usage:
    # Resolve host/port/region/credentials only
    python tools/check_iam_auth.py

    # Explicit URL and user, also sign a token
    python tools/check_iam_auth.py --url postgresql://db.example.com:5432/app \\
        --username app_iam --token

    # Full check: open one connection and run SELECT 1
    python tools/check_iam_auth.py --connect

Requires:
    RDS_IAM_URL / RDS_IAM_USERNAME env vars (or --url / --username)
    AWS credentials discoverable by the default chain
"""

import argparse
import json
import os
import sys
from dataclasses import replace

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from __version__ import __version__
from core.config import RdsIamSettings
from core.logging import configure_logging
from infrastructure.auth import RdsIamTokenSupplier
from services.preflight import IamAuthPreflight


def build_settings(args: argparse.Namespace) -> RdsIamSettings:
    """Environment settings with CLI overrides applied."""
    settings = RdsIamSettings.from_env()
    overrides = {}
    if args.url:
        overrides["url"] = args.url
    if args.username:
        overrides["username"] = args.username
    if args.region:
        overrides["region"] = args.region
    return replace(settings, **overrides) if overrides else settings


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Check RDS IAM authentication")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--url", help="Connection URL (default: RDS_IAM_URL)")
    parser.add_argument("--username", help="Database user (default: RDS_IAM_USERNAME)")
    parser.add_argument("--region", help="Explicit region (override env var still wins)")
    parser.add_argument("--token", action="store_true", help="Also sign one token")
    parser.add_argument("--connect", action="store_true", help="Also open one connection")
    parser.add_argument("--json", action="store_true", help="Print result as JSON")
    parser.add_argument("--log-level", default=os.environ.get("LOG_LEVEL", "WARNING"))
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level)

    settings = build_settings(args)
    supplier = RdsIamTokenSupplier.from_settings(settings)
    result = IamAuthPreflight(supplier, settings).validate(
        sign_token=args.token,
        connect=args.connect,
    )

    if args.json:
        print(json.dumps({
            "valid": result.valid,
            "errors": result.errors,
            "warnings": result.warnings,
            "details": result.details,
        }, indent=2, default=str))
    else:
        print(f"\nRDS IAM auth check: {'OK' if result.valid else 'FAILED'}")
        for key, value in result.details.items():
            print(f"  {key}: {value}")
        for warning in result.warnings:
            print(f"  WARNING: {warning}")
        for error in result.errors:
            print(f"  ERROR: {error}")

    return 0 if result.valid else 1


if __name__ == "__main__":
    sys.exit(main())

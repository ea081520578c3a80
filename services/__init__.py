# ============================================================================
# SERVICES MODULE
# ============================================================================
# STATUS: Service layer
# PURPOSE: Pre-flight validation of IAM auth configuration
# CREATED: 17 OCT 2026
# ============================================================================
"""
Services Module

Usage:
    from services import IamAuthPreflight

    result = IamAuthPreflight(supplier, settings).validate(sign_token=True)
"""

from .preflight import IamAuthPreflight, PreflightResult

__all__ = [
    "IamAuthPreflight",
    "PreflightResult",
]

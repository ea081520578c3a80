# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 17 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the RDS IAM token
supplier and its connection pool.
"""

from core.config.defaults import (
    RdsIamDefaults,
    PoolDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)
from core.config.settings import RdsIamSettings

__all__ = [
    "RdsIamDefaults",
    "PoolDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
    "RdsIamSettings",
]

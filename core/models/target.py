# ============================================================================
# CONNECTION TARGET MODELS
# ============================================================================
# STATUS: Core - Connection descriptor and parsed target
# PURPOSE: Immutable inputs to the token pipeline
# CREATED: 17 OCT 2026
# ============================================================================
"""
Connection Target Models

ConnectionDescriptor is what configuration hands over: a URL-like string
and a username. ParsedTarget is what the descriptor parser extracts from
that URL. Neither ever carries a password.
"""

from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator


class ConnectionDescriptor(BaseModel):
    """
    Connection descriptor supplied by configuration.

    Set once; the username is validated at token-request time, not here,
    so an unconfigured descriptor can still be constructed at startup.
    Surrounding whitespace is stripped from the username so the user a
    token is signed for and the user the pool logs in as are the same.
    """

    url: str = Field(
        description="Connection URL, e.g. postgresql://host:5432/db (jdbc: prefix allowed)"
    )
    username: str = Field(
        default="",
        description="Database user mapped to an IAM identity",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "url": "jdbc:postgresql://mydb.cluster-abc.us-east-1.rds.amazonaws.com:5432/app",
                    "username": "app_iam_user",
                }
            ]
        },
    }

    # ----------------------------------------------------------------
    # Validators
    # ----------------------------------------------------------------

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v):
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v


class ParsedTarget(BaseModel):
    """Host and port extracted from a connection URL."""

    scheme: str = Field(default="postgresql", description="URL scheme without jdbc: prefix")
    host: str = Field(min_length=1, description="Database hostname")
    port: int = Field(default=5432, ge=1, le=65535, description="Database port")
    database: Optional[str] = Field(default=None, description="Database name from the URL path")

    model_config = {"frozen": True}

    @computed_field
    @property
    def endpoint(self) -> str:
        """host:port as handed to the token signer."""
        return f"{self.host}:{self.port}"

    @computed_field
    @property
    def sanitized_url(self) -> str:
        """Credential-free URL, safe to log."""
        # IPv6 literals need their brackets back to stay a parsable URL
        host = f"[{self.host}]" if ":" in self.host else self.host
        path = f"/{self.database}" if self.database else ""
        return f"{self.scheme}://{host}:{self.port}{path}"

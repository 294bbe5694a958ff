from __future__ import annotations

import os
from enum import Enum
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field


class OwnershipMode(str, Enum):
    """Rule deciding whether a client may exchange a subject token."""

    AUDIENCE_OR_CLIENT_ID = "audience_or_client_id"
    AUDIENCE = "audience"


class InMemoryValidatorConfig(BaseModel):
    """Static token table for the in-memory validator."""

    tokens: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class JwksConfig(BaseModel):
    """Settings for validating subject tokens against a JWKS endpoint."""

    url: str = ""
    audience: str = ""
    issuer: str = ""
    leeway: int = 30


class TokenValidatorConfig(BaseModel):
    """Token validation backend settings."""

    backend: Literal["inmemory", "jwks"] = "inmemory"
    inmemory: InMemoryValidatorConfig = InMemoryValidatorConfig()
    jwks: JwksConfig = JwksConfig()


class TokenExchangeConfig(BaseModel):
    """Top-level configuration model."""

    ownership_mode: OwnershipMode = OwnershipMode.AUDIENCE_OR_CLIENT_ID
    validation_timeout: Optional[float] = 10.0
    rewrite_client_id: bool = False
    token_validator: TokenValidatorConfig = TokenValidatorConfig()


def load_config(path: Optional[str] = None) -> TokenExchangeConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to TOKEN_EXCHANGE_CONFIG
            env variable or 'config.yaml' in the current directory.
    """

    config_path = path or os.getenv("TOKEN_EXCHANGE_CONFIG", "config.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = TokenExchangeConfig(**data)
    else:
        config = TokenExchangeConfig()

    jwks = config.token_validator.jwks
    jwks.url = os.getenv("TOKEN_EXCHANGE_JWKS_URL", jwks.url)
    jwks.audience = os.getenv("TOKEN_EXCHANGE_JWKS_AUDIENCE", jwks.audience)
    jwks.issuer = os.getenv("TOKEN_EXCHANGE_JWKS_ISSUER", jwks.issuer)
    jwks.leeway = int(os.getenv("TOKEN_EXCHANGE_JWKS_LEEWAY", str(jwks.leeway)))
    return config

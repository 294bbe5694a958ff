"""Token validation adapter factory and initialization."""

from __future__ import annotations

import os
from typing import Optional

from ..config import TokenExchangeConfig, load_config
from .base import TokenValidatorAdapter
from .inmemory import InMemoryTokenValidator


def get_token_validator(
    backend: Optional[str] = None, config: Optional[TokenExchangeConfig] = None
) -> TokenValidatorAdapter:
    """Factory function to get the configured token validator."""

    config = config or load_config()
    backend = (
        backend
        or os.getenv("TOKEN_EXCHANGE_VALIDATOR")
        or config.token_validator.backend
    ).lower()

    if backend == "inmemory":
        return InMemoryTokenValidator(config.token_validator.inmemory.tokens)
    elif backend == "jwks":
        from .jwks import JwksTokenValidator

        jwks_conf = config.token_validator.jwks
        if not jwks_conf.url:
            raise ValueError("JWKS token validator requires a JWKS url")
        return JwksTokenValidator(jwks_conf)
    else:
        raise ValueError(f"Unsupported token validator backend: {backend}")


__all__ = ["InMemoryTokenValidator", "TokenValidatorAdapter", "get_token_validator"]

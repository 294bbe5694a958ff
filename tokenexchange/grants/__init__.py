"""Extension grant contract, the token exchange grant and the grant registry."""

from .base import (
    ClientAuthentication,
    ExtensionGrantValidator,
    GrantValidationContext,
    GrantValidationResult,
    ValidatedTokenRequest,
)
from .registry import GrantRegistry
from .token_exchange import TokenExchangeGrantValidator

__all__ = [
    "ClientAuthentication",
    "ExtensionGrantValidator",
    "GrantRegistry",
    "GrantValidationContext",
    "GrantValidationResult",
    "TokenExchangeGrantValidator",
    "ValidatedTokenRequest",
]

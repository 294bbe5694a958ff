"""tokenexchange: OAuth 2.0 Token Exchange (RFC 8693) grant validation."""

from __future__ import annotations

from typing import Optional

from .adapters import InMemoryTokenValidator, TokenValidatorAdapter, get_token_validator
from .config import OwnershipMode, TokenExchangeConfig, load_config
from .constants import GRANT_TYPE, TokenTypes
from .exceptions import (
    ClaimsParsingError,
    InvalidRequestError,
    SubjectParsingError,
    TokenExchangeError,
)
from .grants import (
    ClientAuthentication,
    GrantRegistry,
    GrantValidationContext,
    GrantValidationResult,
    TokenExchangeGrantValidator,
    ValidatedTokenRequest,
)
from .models import Actor, Claim, ExchangeRequest
from .parsers import TokenExchangeClaimsParser, TokenExchangeRequestParser
from .validators import DefaultSubjectTokenValidator, DefaultTokenExchangeRequestValidator


def build_token_exchange_grant(
    token_validator: Optional[TokenValidatorAdapter] = None,
    config: Optional[TokenExchangeConfig] = None,
) -> TokenExchangeGrantValidator:
    """Wire up a token exchange grant validator.

    Args:
        token_validator: Adapter to the host's access token validation. Chosen
            from configuration when omitted.
        config: Settings to use instead of :func:`load_config`.
    """
    config = config or load_config()
    token_validator = token_validator or get_token_validator(config=config)

    subject_token_validator = DefaultSubjectTokenValidator(
        token_validator, timeout=config.validation_timeout
    )
    return TokenExchangeGrantValidator(
        parser=TokenExchangeRequestParser(),
        request_validator=DefaultTokenExchangeRequestValidator(
            subject_token_validator, ownership_mode=config.ownership_mode
        ),
        claims_parser=TokenExchangeClaimsParser(),
        rewrite_client_id=config.rewrite_client_id,
    )


__version__ = "0.1.0"
__all__ = [
    "Actor",
    "Claim",
    "ClaimsParsingError",
    "ClientAuthentication",
    "DefaultSubjectTokenValidator",
    "DefaultTokenExchangeRequestValidator",
    "ExchangeRequest",
    "GRANT_TYPE",
    "GrantRegistry",
    "GrantValidationContext",
    "GrantValidationResult",
    "InMemoryTokenValidator",
    "InvalidRequestError",
    "OwnershipMode",
    "SubjectParsingError",
    "TokenExchangeClaimsParser",
    "TokenExchangeConfig",
    "TokenExchangeError",
    "TokenExchangeGrantValidator",
    "TokenExchangeRequestParser",
    "TokenTypes",
    "TokenValidatorAdapter",
    "ValidatedTokenRequest",
    "build_token_exchange_grant",
    "get_token_validator",
    "load_config",
]

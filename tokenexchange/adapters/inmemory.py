"""In-memory token validation for tests and local experiments."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence, Union

from ..models import Claim, TokenValidationResult, claims_from_mapping
from .base import TokenValidatorAdapter

TokenClaims = Union[Mapping[str, Any], Sequence[Claim]]


class InMemoryTokenValidator(TokenValidatorAdapter):
    """Looks tokens up in a static table of known claims."""

    def __init__(self, tokens: Optional[Mapping[str, TokenClaims]] = None) -> None:
        self._tokens: Dict[str, list] = {}
        for token, claims in (tokens or {}).items():
            self.add_token(token, claims)

    def add_token(self, token: str, claims: TokenClaims) -> None:
        """Register ``token`` with a claims payload or a claim sequence."""
        if isinstance(claims, Mapping):
            self._tokens[token] = claims_from_mapping(claims)
        else:
            self._tokens[token] = list(claims)

    async def validate_access_token(self, token: str) -> TokenValidationResult:
        claims = self._tokens.get(token)
        if claims is None:
            return TokenValidationResult(is_error=True, error="invalid_token")
        return TokenValidationResult(is_error=False, claims=claims)

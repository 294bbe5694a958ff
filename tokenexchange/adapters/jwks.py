from __future__ import annotations

import asyncio
import time
from typing import Any, List, Mapping, Optional

import jwt
import requests

from ..config import JwksConfig
from ..models import TokenValidationResult, claims_from_mapping
from .base import TokenValidatorAdapter

JWKS_CACHE_SECONDS = 300
DEFAULT_ALGORITHM = "RS256"


class JwksTokenValidator(TokenValidatorAdapter):
    """Validates JWT access tokens against the issuer's JWKS document."""

    def __init__(self, config: Optional[JwksConfig] = None) -> None:
        self.config = config or JwksConfig()
        self._jwks_cache: List[Mapping] = []
        self._last_fetch: float = 0

    def _fetch_jwks(self) -> None:
        resp = requests.get(self.config.url, timeout=5)
        resp.raise_for_status()
        self._jwks_cache = resp.json().get("keys", [])
        self._last_fetch = time.time()

    def verify_token(self, token: str) -> Mapping[str, Any]:
        """Validate JWT using configured JWKS."""
        now = time.time()
        if not self._jwks_cache or now - self._last_fetch > JWKS_CACHE_SECONDS:
            self._fetch_jwks()

        header = jwt.get_unverified_header(token)
        for key in self._jwks_cache:
            if key.get("kid") == header.get("kid"):
                # the key, not the token header, decides the algorithm
                return jwt.decode(
                    token,
                    jwt.algorithms.RSAAlgorithm.from_jwk(key),
                    audience=self.config.audience or None,
                    issuer=self.config.issuer or None,
                    leeway=self.config.leeway,
                    algorithms=[key.get("alg", DEFAULT_ALGORITHM)],
                    options={"verify_aud": bool(self.config.audience)},
                )
        raise jwt.exceptions.InvalidSignatureError("No matching JWK found.")

    async def validate_access_token(self, token: str) -> TokenValidationResult:
        try:
            payload = await asyncio.to_thread(self.verify_token, token)
        except (
            jwt.PyJWTError,
            requests.RequestException,
            KeyError,
            TypeError,
            ValueError,
        ) as e:
            return TokenValidationResult(is_error=True, error=str(e))
        return TokenValidationResult(is_error=False, claims=claims_from_mapping(payload))

"""Validation of the subject token presented in a token exchange request."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..adapters.base import TokenValidatorAdapter
from ..constants import TokenTypes
from ..models import SubjectTokenValidationResult

logger = logging.getLogger(__name__)


class DefaultSubjectTokenValidator:
    """Accepts access tokens issued by the host authorization server.

    Only ``urn:ietf:params:oauth:token-type:access_token`` subject tokens are
    supported. The adapter call is bounded by ``timeout`` seconds when set;
    a timeout or an adapter exception counts as an invalid token and is not
    retried. Cancellation of the caller propagates.
    """

    def __init__(
        self, token_validator: TokenValidatorAdapter, timeout: Optional[float] = None
    ) -> None:
        if token_validator is None:
            raise ValueError("token_validator is required")
        self._token_validator = token_validator
        self._timeout = timeout

    async def validate(self, token: str, token_type: str) -> SubjectTokenValidationResult:
        if not token or not token.strip():
            raise ValueError("token is required")
        if not token_type or not token_type.strip():
            raise ValueError("token_type is required")

        if token_type != TokenTypes.ACCESS_TOKEN:
            logger.error(f"Received unsupported token type of {token_type}")
            return SubjectTokenValidationResult.failure()

        try:
            result = await asyncio.wait_for(
                self._token_validator.validate_access_token(token), self._timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"Subject token validation timed out after {self._timeout}s")
            return SubjectTokenValidationResult.failure()
        except Exception as e:
            logger.warning(f"Subject token validation failed: {e}")
            return SubjectTokenValidationResult.failure()

        if result.is_error:
            logger.error("Received invalid token")
            return SubjectTokenValidationResult.failure()

        return SubjectTokenValidationResult.success(result.claims)

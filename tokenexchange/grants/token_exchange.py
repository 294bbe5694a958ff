"""The RFC 8693 token exchange grant."""

from __future__ import annotations

import logging
from typing import Sequence

from ..constants import (
    GRANT_TYPE,
    ClaimTypes,
    ResponseParameters,
    TokenRequestErrors,
    TokenTypes,
)
from ..exceptions import TokenExchangeError
from ..models import Claim, claim_values
from ..parsers import TokenExchangeClaimsParser, TokenExchangeRequestParser
from ..validators import DefaultTokenExchangeRequestValidator
from ..validators.request import INVALID_SUBJECT_TOKEN
from .base import (
    ExtensionGrantValidator,
    GrantValidationContext,
    GrantValidationResult,
    ValidatedTokenRequest,
)

logger = logging.getLogger(__name__)

MISSING_CLIENT_ID = "Token exchange request must identify the requesting client"
MISSING_SUBJECT = (
    "Unable to parse subject claim — subject claim is required for token exchange"
)


class TokenExchangeGrantValidator(ExtensionGrantValidator):
    """Runs a token exchange request through parsing, validation and claims.

    Every failure is reported as ``invalid_grant`` with a description; no
    :class:`TokenExchangeError` escapes :meth:`validate`.
    """

    def __init__(
        self,
        parser: TokenExchangeRequestParser,
        request_validator: DefaultTokenExchangeRequestValidator,
        claims_parser: TokenExchangeClaimsParser,
        rewrite_client_id: bool = False,
    ) -> None:
        if parser is None:
            raise ValueError("parser is required")
        if request_validator is None:
            raise ValueError("request_validator is required")
        if claims_parser is None:
            raise ValueError("claims_parser is required")
        self._parser = parser
        self._request_validator = request_validator
        self._claims_parser = claims_parser
        self._rewrite_client_id = rewrite_client_id

    @property
    def grant_type(self) -> str:
        return GRANT_TYPE

    async def validate(self, context: GrantValidationContext) -> None:
        request = context.request
        if request.client_authentication is None:
            logger.info("Received unauthenticated token exchange request")

        if not request.client_id or not request.client_id.strip():
            context.result = self._failure(MISSING_CLIENT_ID)
            return

        try:
            exchange_request = self._parser.parse(request.client_id, request.raw)
        except TokenExchangeError as e:
            logger.debug(f"Rejected token exchange request from {request.client_id}: {e}")
            context.result = self._failure(str(e))
            return

        validation_result = await self._request_validator.validate(exchange_request)
        if not validation_result.is_valid:
            logger.info(
                f"Token exchange for client {request.client_id} failed validation: "
                f"{validation_result.error_description}"
            )
            context.result = self._failure(INVALID_SUBJECT_TOKEN)
            return

        try:
            subject = self._claims_parser.parse_subject(
                validation_result.claims, exchange_request
            )
            claims = self._claims_parser.parse_claims(
                validation_result.claims, exchange_request
            )
        except TokenExchangeError as e:
            context.result = self._failure(
                f"Unable to generate claims. {type(e).__name__} - {e}"
            )
            return

        if subject is None:
            context.result = self._failure(MISSING_SUBJECT)
            return

        if self._rewrite_client_id:
            self.update_request(request, claims)

        logger.info(f"Exchanged token of subject {subject} for client {request.client_id}")
        context.result = GrantValidationResult.success(
            subject=subject,
            authentication_method=self.grant_type,
            claims=claims,
            custom_response={ResponseParameters.ISSUED_TOKEN_TYPE: TokenTypes.ACCESS_TOKEN},
        )

    def update_request(
        self, request: ValidatedTokenRequest, claims: Sequence[Claim]
    ) -> None:
        """Make the host issue the new token for the subject token's client."""
        client_ids = claim_values(claims, ClaimTypes.CLIENT_ID)
        if client_ids:
            request.client_id = client_ids[0]

    @staticmethod
    def _failure(description: str) -> GrantValidationResult:
        return GrantValidationResult.failure(TokenRequestErrors.INVALID_GRANT, description)

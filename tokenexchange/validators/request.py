"""Validation of a parsed token exchange request."""

from __future__ import annotations

import logging
from typing import Sequence

from ..config import OwnershipMode
from ..constants import ClaimTypes
from ..models import Claim, ExchangeRequest, ExchangeValidationResult, claim_values
from .subject import DefaultSubjectTokenValidator

logger = logging.getLogger(__name__)

INVALID_SUBJECT_TOKEN = "Invalid subject token"
NOT_A_RECIPIENT = "Requester must be a recipient of the subject token"


class DefaultTokenExchangeRequestValidator:
    """Checks that the subject token is valid and belongs to the requester.

    With ``OwnershipMode.AUDIENCE_OR_CLIENT_ID`` the requesting client must be
    one of the token's ``aud`` values or the token's own ``client_id``. With
    ``OwnershipMode.AUDIENCE`` only ``aud`` counts.
    """

    def __init__(
        self,
        subject_token_validator: DefaultSubjectTokenValidator,
        ownership_mode: OwnershipMode = OwnershipMode.AUDIENCE_OR_CLIENT_ID,
    ) -> None:
        if subject_token_validator is None:
            raise ValueError("subject_token_validator is required")
        self._subject_token_validator = subject_token_validator
        self._ownership_mode = OwnershipMode(ownership_mode)

    async def validate(self, request: ExchangeRequest) -> ExchangeValidationResult:
        if request is None:
            raise ValueError("request is required")

        result = await self._subject_token_validator.validate(
            request.subject_token, request.subject_token_type
        )
        if not result.is_valid:
            return ExchangeValidationResult.failure(INVALID_SUBJECT_TOKEN)

        if not self._is_recipient(request.client_id, result.claims):
            logger.info(
                f"Client {request.client_id} is not a recipient of the subject token"
            )
            return ExchangeValidationResult.failure(NOT_A_RECIPIENT)

        return ExchangeValidationResult.success(result.claims)

    def _is_recipient(self, client_id: str, claims: Sequence[Claim]) -> bool:
        if client_id in claim_values(claims, ClaimTypes.AUDIENCE):
            return True
        if self._ownership_mode is OwnershipMode.AUDIENCE:
            return False
        return client_id in claim_values(claims, ClaimTypes.CLIENT_ID)

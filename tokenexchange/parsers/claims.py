"""Derivation of the subject and the ``act`` claim for an exchanged token."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from pydantic import ValidationError

from ..constants import JSON_CLAIM_VALUE_TYPE, ClaimTypes
from ..exceptions import ClaimsParsingError, SubjectParsingError
from ..models import Actor, Claim, ExchangeRequest, claim_values

logger = logging.getLogger(__name__)


class TokenExchangeClaimsParser:
    """Turns validated subject token claims into the claims to issue."""

    def parse_subject(
        self, claims: Sequence[Claim], request: Optional[ExchangeRequest] = None
    ) -> Optional[str]:
        """Return the subject token's single ``sub`` value, or ``None``.

        Raises:
            SubjectParsingError: If the token carries more than one subject.
        """
        if claims is None:
            raise ValueError("claims is required")

        subjects = claim_values(claims, ClaimTypes.SUBJECT)
        if len(subjects) > 1:
            raise SubjectParsingError(
                f"Subject token contains {len(subjects)} subject claims, expected one"
            )
        return subjects[0] if subjects else None

    def parse_actor_claim(
        self, claims: Sequence[Claim], request: ExchangeRequest
    ) -> Optional[Actor]:
        """Return the actor to record for this exchange.

        ``None`` means no delegation happens: either the token's own client
        is performing the exchange or the token names no client at all.
        """
        if claims is None:
            raise ValueError("claims is required")
        if request is None:
            raise ValueError("request is required")

        client_ids = claim_values(claims, ClaimTypes.CLIENT_ID)
        if len(client_ids) > 1:
            raise ClaimsParsingError("Subject token contains multiple client_id claims")
        if not client_ids:
            logger.debug("Subject token has no client_id claim, no actor recorded")
            return None

        token_client_id = client_ids[0]
        if token_client_id == request.client_id:
            return None

        return Actor(
            client_id=token_client_id,
            inner_actor=self._parse_inner_actor(claims),
        )

    def parse_claims(
        self, claims: Sequence[Claim], request: ExchangeRequest
    ) -> List[Claim]:
        """Return the claims to issue, stamping an ``act`` claim on delegation."""
        actor = self.parse_actor_claim(claims, request)
        if actor is None:
            return list(claims)

        logger.debug(
            f"Client {request.client_id} is acting for client {actor.client_id}"
        )
        parsed = [claim for claim in claims if claim.type != ClaimTypes.ACTOR]
        parsed.append(
            Claim(
                type=ClaimTypes.ACTOR,
                value=actor.to_json(),
                value_type=JSON_CLAIM_VALUE_TYPE,
            )
        )
        return parsed

    @staticmethod
    def _parse_inner_actor(claims: Sequence[Claim]) -> Optional[Actor]:
        existing = claim_values(claims, ClaimTypes.ACTOR)
        if not existing:
            return None
        if len(existing) > 1:
            raise ClaimsParsingError("Subject token contains multiple act claims")
        try:
            return Actor.from_json(existing[0])
        except ValidationError as e:
            raise ClaimsParsingError("Subject token act claim is not a valid actor") from e

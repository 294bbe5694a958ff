"""Value objects shared by the token exchange pipeline."""

from __future__ import annotations

import json
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import GRANT_TYPE, JSON_CLAIM_VALUE_TYPE


class Claim(BaseModel):
    """A single ``(type, value)`` claim. Claim types may repeat."""

    model_config = ConfigDict(frozen=True)

    type: str
    value: str
    value_type: Optional[str] = Field(
        default=None, description="Set to 'JSON' when value holds a JSON document"
    )


def claim_values(claims: Sequence[Claim], claim_type: str) -> List[str]:
    """Return the values of every claim of ``claim_type`` in order."""
    return [claim.value for claim in claims if claim.type == claim_type]


def claims_from_mapping(payload: Mapping[str, Any]) -> List[Claim]:
    """Flatten a decoded token payload into a claim sequence.

    List values become one claim per item and object values are stored as
    JSON documents, so ``{"aud": ["a", "b"]}`` yields two ``aud`` claims.
    """
    claims: List[Claim] = []
    for claim_type, raw in payload.items():
        values = raw if isinstance(raw, (list, tuple)) else [raw]
        for value in values:
            if value is None:
                continue
            if isinstance(value, str):
                claims.append(Claim(type=claim_type, value=value))
            elif isinstance(value, dict):
                claims.append(
                    Claim(
                        type=claim_type,
                        value=json.dumps(value, separators=(",", ":")),
                        value_type=JSON_CLAIM_VALUE_TYPE,
                    )
                )
            else:
                claims.append(Claim(type=claim_type, value=json.dumps(value)))
    return claims


class ExchangeRequest(BaseModel):
    """A parsed token exchange request (RFC 8693 §2.1)."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    grant_type: str
    resource: Optional[str] = None
    audience: Optional[str] = None
    scope: Optional[Tuple[str, ...]] = None
    requested_token_type: Optional[str] = None
    subject_token: str
    subject_token_type: str
    actor_token: Optional[str] = None
    actor_token_type: Optional[str] = None

    @model_validator(mode="after")
    def _check_invariants(self) -> "ExchangeRequest":
        if self.grant_type != GRANT_TYPE:
            raise ValueError(f"grant_type must be {GRANT_TYPE}")
        if not self.subject_token.strip() or not self.subject_token_type.strip():
            raise ValueError("subject_token and subject_token_type must not be blank")
        if (self.actor_token is None) != (self.actor_token_type is None):
            raise ValueError("actor_token and actor_token_type must be set together")
        return self


class TokenValidationResult(BaseModel):
    """Outcome reported by a token validation adapter."""

    model_config = ConfigDict(frozen=True)

    is_error: bool
    error: Optional[str] = None
    claims: List[Claim] = Field(default_factory=list)


class SubjectTokenValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    claims: Optional[List[Claim]] = None

    @classmethod
    def success(cls, claims: Sequence[Claim]) -> "SubjectTokenValidationResult":
        if claims is None:
            raise ValueError("claims must not be None")
        return cls(is_valid=True, claims=list(claims))

    @classmethod
    def failure(cls) -> "SubjectTokenValidationResult":
        return cls(is_valid=False)


class ExchangeValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    error_description: Optional[str] = None
    claims: Optional[List[Claim]] = None

    @classmethod
    def success(
        cls, claims: Optional[Sequence[Claim]] = None
    ) -> "ExchangeValidationResult":
        return cls(is_valid=True, claims=list(claims or []))

    @classmethod
    def failure(
        cls, error_description: Optional[str] = None
    ) -> "ExchangeValidationResult":
        return cls(is_valid=False, error_description=error_description)


class Actor(BaseModel):
    """A link in the ``act`` delegation chain (RFC 8693 §4.1).

    ``inner_actor`` is the actor recorded by the previous exchange and is
    serialized as a nested ``act`` member. Members we do not model (``sub``
    for instance) are kept so that a chain survives re-encoding.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    issuer: Optional[str] = Field(default=None, alias="iss")
    client_id: Optional[str] = None
    inner_actor: Optional[Actor] = Field(default=None, alias="act")

    def to_json(self) -> str:
        """Serialize to compact JSON, omitting absent members."""
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_json(cls, data: str) -> "Actor":
        return cls.model_validate_json(data)

    def chain(self) -> Iterator["Actor"]:
        """Yield this actor followed by every inner actor."""
        actor: Optional[Actor] = self
        while actor is not None:
            yield actor
            actor = actor.inner_actor

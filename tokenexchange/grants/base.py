"""Extension grant contract between the host authorization server and a grant.

The host builds a :class:`GrantValidationContext` for each token request whose
``grant_type`` matches a registered :class:`ExtensionGrantValidator`, awaits
``validate`` and reads ``context.result`` back to issue a token or return an
error response.
"""

from __future__ import annotations

import abc
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field, model_validator

from ..constants import RequestParameters
from ..models import Claim


class ClientAuthentication(BaseModel):
    """How the host authenticated the client making the token request."""

    method: str = Field(..., description="e.g. client_secret_basic, private_key_jwt")
    credential: Optional[str] = Field(default=None, description="Presented secret")


class ValidatedTokenRequest(BaseModel):
    """Token request as seen by the host after client identification.

    ``grant_type`` defaults to the ``grant_type`` form parameter when the host
    does not set it.
    """

    client_id: str
    grant_type: Optional[str] = None
    raw: Dict[str, Any] = Field(default_factory=dict, description="Form parameters")
    client_authentication: Optional[ClientAuthentication] = None

    @model_validator(mode="after")
    def _default_grant_type(self) -> "ValidatedTokenRequest":
        if self.grant_type is None:
            value = self.raw.get(RequestParameters.GRANT_TYPE)
            if isinstance(value, (list, tuple)):
                value = value[0] if value else None
            if isinstance(value, str):
                self.grant_type = value
        return self


class GrantValidationResult(BaseModel):
    """Outcome of an extension grant, consumed by the host to issue a token."""

    is_error: bool = False
    error: Optional[str] = None
    error_description: Optional[str] = None
    subject: Optional[str] = None
    authentication_method: Optional[str] = None
    claims: List[Claim] = Field(default_factory=list)
    custom_response: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def success(
        cls,
        subject: str,
        authentication_method: str,
        claims: Optional[Sequence[Claim]] = None,
        custom_response: Optional[Dict[str, Any]] = None,
    ) -> "GrantValidationResult":
        return cls(
            subject=subject,
            authentication_method=authentication_method,
            claims=list(claims or []),
            custom_response=dict(custom_response or {}),
        )

    @classmethod
    def failure(
        cls, error: str, error_description: Optional[str] = None
    ) -> "GrantValidationResult":
        return cls(is_error=True, error=error, error_description=error_description)

    def to_response(self) -> Dict[str, Any]:
        """Return the error body, or the extra success response parameters."""
        if self.is_error:
            body: Dict[str, Any] = {"error": self.error}
            if self.error_description:
                body["error_description"] = self.error_description
            return body
        return dict(self.custom_response)


class GrantValidationContext(BaseModel):
    request: ValidatedTokenRequest
    result: Optional[GrantValidationResult] = None


class ExtensionGrantValidator(metaclass=abc.ABCMeta):
    """A custom grant type plugged into the host's token endpoint."""

    @property
    @abc.abstractmethod
    def grant_type(self) -> str:
        """The ``grant_type`` value this validator handles."""
        raise NotImplementedError

    @abc.abstractmethod
    async def validate(self, context: GrantValidationContext) -> None:
        """Validate the request and set ``context.result``."""
        raise NotImplementedError

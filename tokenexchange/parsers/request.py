"""Parsing of raw token exchange request parameters."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..constants import GRANT_TYPE, RequestParameters
from ..exceptions import InvalidRequestError
from ..models import ExchangeRequest

INVALID_GRANT_TYPE = f"Token exchange request must have grant type of {GRANT_TYPE}"
MISSING_SUBJECT_TOKEN = "Token exchange request must contain subject token"
MISSING_SUBJECT_TOKEN_TYPE = "Token exchange request must contain subject token type"
UNPAIRED_ACTOR_TOKEN = (
    "Token exchange request must contain both actor token and actor token type, "
    "or neither"
)


def get_param(params: Mapping[str, Any], name: str) -> Optional[str]:
    """Return the first value of ``name`` from a possibly multi-valued bag.

    Raises:
        InvalidRequestError: If the value is not a string.
    """
    value = params.get(name)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is not None and not isinstance(value, str):
        raise InvalidRequestError(f"Token exchange request parameter {name} must be a string")
    return value


class TokenExchangeRequestParser:
    """Builds :class:`ExchangeRequest` objects from form parameters."""

    def parse(self, client_id: str, params: Mapping[str, Any]) -> ExchangeRequest:
        """Parse ``params`` sent by ``client_id``.

        Raises:
            InvalidRequestError: If the parameters do not form a valid token
                exchange request.
            ValueError: If ``client_id`` is blank or ``params`` is ``None``.
        """
        if not client_id or not client_id.strip():
            raise ValueError("client_id is required")
        if params is None:
            raise ValueError("params is required")

        grant_type = get_param(params, RequestParameters.GRANT_TYPE)
        if grant_type != GRANT_TYPE:
            raise InvalidRequestError(INVALID_GRANT_TYPE)

        subject_token = get_param(params, RequestParameters.SUBJECT_TOKEN)
        if not subject_token or not subject_token.strip():
            raise InvalidRequestError(MISSING_SUBJECT_TOKEN)

        subject_token_type = get_param(params, RequestParameters.SUBJECT_TOKEN_TYPE)
        if not subject_token_type or not subject_token_type.strip():
            raise InvalidRequestError(MISSING_SUBJECT_TOKEN_TYPE)

        actor_token = get_param(params, RequestParameters.ACTOR_TOKEN)
        actor_token_type = get_param(params, RequestParameters.ACTOR_TOKEN_TYPE)
        if (actor_token is None) != (actor_token_type is None):
            raise InvalidRequestError(UNPAIRED_ACTOR_TOKEN)

        scope = get_param(params, RequestParameters.SCOPE)

        return ExchangeRequest(
            client_id=client_id,
            grant_type=grant_type,
            resource=get_param(params, RequestParameters.RESOURCE),
            audience=get_param(params, RequestParameters.AUDIENCE),
            scope=tuple(scope.split(" ")) if scope is not None else None,
            requested_token_type=get_param(
                params, RequestParameters.REQUESTED_TOKEN_TYPE
            ),
            subject_token=subject_token,
            subject_token_type=subject_token_type,
            actor_token=actor_token,
            actor_token_type=actor_token_type,
        )

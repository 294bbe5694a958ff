"""Constants for OAuth 2.0 Token Exchange (RFC 8693)."""

from __future__ import annotations

from typing import Final, Tuple

GRANT_TYPE: Final = "urn:ietf:params:oauth:grant-type:token-exchange"


class RequestParameters:
    """Form parameter names of a token exchange request (RFC 8693 §2.1)."""

    GRANT_TYPE: Final = "grant_type"
    RESOURCE: Final = "resource"
    AUDIENCE: Final = "audience"
    SCOPE: Final = "scope"
    REQUESTED_TOKEN_TYPE: Final = "requested_token_type"
    SUBJECT_TOKEN: Final = "subject_token"
    SUBJECT_TOKEN_TYPE: Final = "subject_token_type"
    ACTOR_TOKEN: Final = "actor_token"
    ACTOR_TOKEN_TYPE: Final = "actor_token_type"


class ResponseParameters:
    ISSUED_TOKEN_TYPE: Final = "issued_token_type"


class TokenTypes:
    """Token type identifiers (RFC 8693 §3)."""

    ACCESS_TOKEN: Final = "urn:ietf:params:oauth:token-type:access_token"
    REFRESH_TOKEN: Final = "urn:ietf:params:oauth:token-type:refresh_token"
    ID_TOKEN: Final = "urn:ietf:params:oauth:token-type:id_token"
    SAML1: Final = "urn:ietf:params:oauth:token-type:saml1"
    SAML2: Final = "urn:ietf:params:oauth:token-type:saml2"
    JWT: Final = "urn:ietf:params:oauth:token-type:jwt"

    ALL: Final[Tuple[str, ...]] = (
        ACCESS_TOKEN,
        REFRESH_TOKEN,
        ID_TOKEN,
        SAML1,
        SAML2,
        JWT,
    )


class ClaimTypes:
    SUBJECT: Final = "sub"
    AUDIENCE: Final = "aud"
    CLIENT_ID: Final = "client_id"
    ACTOR: Final = "act"
    ISSUER: Final = "iss"


# Value type of claims holding a JSON document, such as ``act``.
JSON_CLAIM_VALUE_TYPE: Final = "JSON"


class TokenRequestErrors:
    INVALID_GRANT: Final = "invalid_grant"
    UNSUPPORTED_GRANT_TYPE: Final = "unsupported_grant_type"

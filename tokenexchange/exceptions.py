"""Errors raised while parsing token exchange requests and claims.

Validation failures (bad tokens, ownership mismatches) are not errors: they
are reported through result objects. The classes below cover malformed input
that stops the pipeline and is turned into an ``invalid_grant`` response by
the grant validator.
"""

from __future__ import annotations


class TokenExchangeError(Exception):
    """Base class for token exchange request errors."""


class InvalidRequestError(TokenExchangeError):
    """The token exchange request is structurally invalid."""


class SubjectParsingError(TokenExchangeError):
    """The subject token does not identify exactly one subject."""


class ClaimsParsingError(TokenExchangeError):
    """The subject token's claims cannot be turned into a delegation chain."""

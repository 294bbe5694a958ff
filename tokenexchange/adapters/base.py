"""Interface to the host's access token validation."""

from __future__ import annotations

import abc

from ..models import TokenValidationResult


class TokenValidatorAdapter(metaclass=abc.ABCMeta):
    """Validates access tokens issued by the host authorization server.

    Adapters report failures through :class:`TokenValidationResult` rather
    than raising.
    """

    @abc.abstractmethod
    async def validate_access_token(self, token: str) -> TokenValidationResult:
        """Validate ``token`` and return its decoded claims."""
        raise NotImplementedError

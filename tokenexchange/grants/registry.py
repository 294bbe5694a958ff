"""Host-side lookup of extension grants by ``grant_type``."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..constants import TokenRequestErrors
from .base import ExtensionGrantValidator, GrantValidationContext, GrantValidationResult


class GrantRegistry:
    """Routes token requests to the extension grant registered for them."""

    def __init__(self) -> None:
        self._validators: Dict[str, ExtensionGrantValidator] = {}

    def register(self, validator: ExtensionGrantValidator) -> None:
        """Register ``validator`` under its grant type.

        Raises:
            ValueError: If the grant type already has a validator.
        """
        grant_type = validator.grant_type
        if grant_type in self._validators:
            raise ValueError(f"Grant type {grant_type} is already registered")
        self._validators[grant_type] = validator

    def get(self, grant_type: str) -> Optional[ExtensionGrantValidator]:
        return self._validators.get(grant_type)

    def grant_types(self) -> List[str]:
        return list(self._validators)

    async def validate(self, context: GrantValidationContext) -> GrantValidationResult:
        """Run the grant matching the request's ``grant_type``."""
        grant_type = context.request.grant_type
        validator = self.get(grant_type) if grant_type else None
        if validator is None:
            context.result = GrantValidationResult.failure(
                TokenRequestErrors.UNSUPPORTED_GRANT_TYPE,
                f"Unsupported grant type: {grant_type}",
            )
            return context.result

        await validator.validate(context)
        return context.result

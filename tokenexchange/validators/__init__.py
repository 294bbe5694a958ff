"""Subject token and request validators."""

from .request import DefaultTokenExchangeRequestValidator
from .subject import DefaultSubjectTokenValidator

__all__ = ["DefaultSubjectTokenValidator", "DefaultTokenExchangeRequestValidator"]

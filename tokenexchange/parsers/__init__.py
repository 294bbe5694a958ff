"""Request and claims parsers."""

from .claims import TokenExchangeClaimsParser
from .request import TokenExchangeRequestParser

__all__ = ["TokenExchangeClaimsParser", "TokenExchangeRequestParser"]

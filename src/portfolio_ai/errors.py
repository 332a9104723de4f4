"""Exception hierarchy for content generation."""

from __future__ import annotations

from typing import Any


class PortfolioAIError(Exception):
    """Base class for all errors raised by portfolio_ai."""


class ConfigurationError(PortfolioAIError, ValueError):
    """Required configuration is missing or out of range."""


class GenerationError(PortfolioAIError):
    """Base class for failures while generating content."""


class GenerationProviderError(GenerationError):
    """The outbound call to the model provider failed.

    The provider's own message is appended so callers can log or map it
    without digging through ``__cause__``.
    """

    def __init__(self, message: str, original: BaseException | None = None):
        self.original = original
        if original is not None:
            message = f"{message}: {original}"
        super().__init__(message)


class GenerationParseError(GenerationError):
    """The model replied, but the reply is not structured data."""

    def __init__(
        self,
        message: str = "could not interpret model output as structured data",
        raw_reply: str | None = None,
    ):
        self.raw_reply = raw_reply
        super().__init__(message)


class GenerationShapeError(GenerationError):
    """The reply parsed but lacks the fields the caller relies on."""

    def __init__(self, message: str, payload: Any = None):
        self.payload = payload
        super().__init__(message)

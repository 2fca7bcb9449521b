"""Exception hierarchy for flavor wheel services."""


class FlavorWheelError(Exception):
    """Base exception for flavor wheel services."""

    pass


class ExtractionValidationError(FlavorWheelError, ValueError):
    """Extraction request is missing identifiers or input text."""

    pass


class WheelScopeError(FlavorWheelError, ValueError):
    """Scope filter lacks a field its scope type requires."""

    pass


class AIExtractionError(FlavorWheelError):
    """AI extraction attempt failed; callers fall back to keyword extraction."""

    pass


class AIUnavailableError(AIExtractionError):
    """AI extraction is disabled or no credential is configured."""

    pass


class AIProviderError(AIExtractionError):
    """Provider call or model construction failed."""

    pass


class AIResponseFormatError(AIExtractionError):
    """Provider response did not contain the expected JSON payload.

    Attributes:
        raw_text: Text of the rejected response, when one was received
    """

    def __init__(self, message: str, raw_text: str | None = None):
        super().__init__(message)
        self.raw_text = raw_text


class AITimeoutError(AIExtractionError):
    """Provider call exceeded the configured timeout."""

    pass

"""Project-wide custom exception types."""


class VoiceJournalError(RuntimeError):
    """Base class for errors raised by the voice journal server."""


class InvalidRequestError(VoiceJournalError):
    """Raised when a request is missing required input (client-correctable)."""


class MissingCredentialError(InvalidRequestError):
    """Raised when a remote call is attempted without an API key."""

    def __init__(self, message: str = "Missing API key.") -> None:  # noqa: D401 – simple constructor
        super().__init__(message)


class UpstreamServiceError(VoiceJournalError):
    """Raised when a hosted model call fails or returns an unusable response."""


class UpstreamTimeoutError(UpstreamServiceError):
    """Raised when a hosted model call exceeds its timeout; safe to retry."""


class ConfigurationError(VoiceJournalError):
    """Raised when a static resource (prompt, dataset) cannot be loaded."""


class TemplateSyntaxError(ValueError):
    """Raised when a prompt template has malformed or too deeply nested blocks."""

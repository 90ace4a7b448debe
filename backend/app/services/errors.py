"""Error taxonomy for the chat relay.

Each error carries the HTTP status and the message returned to the caller
as `{"error": message}`.
"""


class ChatRelayError(Exception):
    """Base class for failures reported to the caller."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ParseError(ChatRelayError):
    """Raised when the request body is not valid JSON."""

    status_code = 400
    default_message = "Invalid JSON in request body"


class ValidationError(ChatRelayError):
    """Raised when `question` or `chatHistory` is missing or malformed."""

    status_code = 400


class ConnectivityError(ChatRelayError):
    """Raised when the Gemini API cannot be reached."""

    status_code = 502
    default_message = "Failed to connect to Gemini API"


class UpstreamError(ChatRelayError):
    """Raised when the Gemini API answers with a non-success status."""

    def __init__(self, upstream_status: int, reason: str):
        super().__init__(
            f"Gemini API error: {upstream_status} {reason}",
            status_code=upstream_status,
        )


class UpstreamDecodeError(ChatRelayError):
    """Raised when the Gemini API body is not valid JSON."""

    status_code = 502
    default_message = "Invalid response from Gemini API"


class ExtractionError(ChatRelayError):
    """Raised when the Gemini API body lacks the candidate text."""

    status_code = 502
    default_message = "Failed to extract response from Gemini API"


class InternalError(ChatRelayError):
    """Any fault not classified above."""

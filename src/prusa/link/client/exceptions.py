"""Exceptions for the PrusaLink client library.

How to use the most important parts:
- `PrusaLinkError`: Catch this base exception to handle every client error.
- `PrusaLinkNetworkError`: The printer could not be reached (connection refused, timeout, DNS).
- `PrusaLinkDecodeError`: The printer answered, but the body is not a usable snapshot. Look at
  `PrusaLinkEmptyResponseError` and `PrusaLinkMalformedResponseError` for the two flavours.
- `PrusaLinkApiError` / `PrusaLinkAuthError`: Only raised when the client runs with `strict_status=True`.
"""


class PrusaLinkError(Exception):
    """Base exception for all PrusaLink client errors."""


class PrusaLinkNetworkError(PrusaLinkError):
    """Raised when the printer is unreachable (timeouts, refused connections, DNS issues)."""


class PrusaLinkApiError(PrusaLinkError):
    """Raised when the printer returns a non-2xx status and strict status handling is enabled."""

    def __init__(self, message: str, status_code: int, response_body: str) -> None:
        """Initialize the error.

        Args:
            message: Error description.
            status_code: HTTP status code.
            response_body: Raw response body from the printer.
        """
        super().__init__(f"[{status_code}] {message}")
        self.status_code = status_code
        self.response_body = response_body


class PrusaLinkAuthError(PrusaLinkApiError):
    """Raised when the printer rejects the API key (401/403) and strict status handling is enabled."""


class PrusaLinkDecodeError(PrusaLinkError):
    """Raised when a response body cannot be turned into a printer snapshot."""


class PrusaLinkEmptyResponseError(PrusaLinkDecodeError):
    """Raised when the printer returns an empty or whitespace-only body.

    PrusaLink answers with an empty body when the API key is rejected or the
    server is still starting up.
    """

    def __init__(self) -> None:
        """Initialize the error."""
        super().__init__("Printer returned an empty response (bad API key or server not ready?)")


class PrusaLinkMalformedResponseError(PrusaLinkDecodeError):
    """Raised when the body is not valid JSON or does not match the snapshot schema."""

    def __init__(self, detail: str) -> None:
        """Initialize the error.

        Args:
            detail: Human readable description of what failed to validate.
        """
        super().__init__(f"Malformed printer response: {detail}")
        self.detail = detail

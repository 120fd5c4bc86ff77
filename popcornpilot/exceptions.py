"""PopcornPilot exception classes."""


class PopcornPilotError(Exception):
    """Base exception for all PopcornPilot errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(PopcornPilotError):
    """Raised when configuration values are invalid."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class TransportError(PopcornPilotError):
    """Raised when the catalog API cannot be reached or answers with an HTTP error."""

    def __init__(
        self, code: str, message: str, status_code: int | None = None
    ) -> None:
        super().__init__(code, message)
        self.status_code = status_code


class AuthenticationError(TransportError):
    """Raised when the API key is missing or rejected (401)."""

    pass


class NotFoundError(TransportError):
    """Raised when the requested endpoint does not exist (404)."""

    pass


class RateLimitedError(TransportError):
    """Raised when rate limited (429)."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        status_code: int | None = 429,
    ) -> None:
        super().__init__(code, message, status_code)
        self.retry_after = retry_after


class ServerError(TransportError):
    """Raised on server errors (5xx)."""

    pass


class RequestRejectedError(TransportError):
    """Raised on any other 4xx response."""

    pass


class NetworkError(TransportError):
    """Raised when the connection fails before a response arrives."""

    pass


class RequestTimeoutError(TransportError):
    """Raised when a request exceeds the configured timeout."""

    pass


class MalformedResponseError(TransportError):
    """Raised when a response body is not the JSON shape we expect."""

    pass


class LogicalError(PopcornPilotError):
    """Raised when the catalog answers but flags the request as failed."""

    pass


class AggregationError(PopcornPilotError):
    """Raised when a trend store operation fails."""

    pass

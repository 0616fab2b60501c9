"""Domain-specific exceptions."""


class ServiceError(Exception):
    """Request-terminating failure surfaced to the caller."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MethodNotAllowed(ServiceError):
    status_code = 405
    default_message = "Method not allowed"


class RateLimitExceeded(ServiceError):
    status_code = 429
    default_message = "Rate limit exceeded. Please try again later."


class InvalidInput(ServiceError):
    status_code = 400
    default_message = "Invalid input"

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(", ".join(self.errors) or None)


class UpstreamError(Exception):
    """Search provider failure; never leaves the search service."""


class UpstreamUnavailable(UpstreamError):
    pass


class UpstreamEmpty(UpstreamError):
    pass


class UpstreamMalformed(UpstreamError):
    pass

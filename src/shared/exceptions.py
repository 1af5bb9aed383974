"""Exceptions shared across bounded contexts."""


class UpstreamServiceError(Exception):
    """A managed upstream service (payment gateway, geocoder) failed.

    Callers log the original error and surface a generic, retry-able message.
    Transient and permanent failures are not distinguished.
    """

    def __init__(self, service: str, message: str = "Service temporarily unavailable"):
        super().__init__(f"{service}: {message}")
        self.service = service
        self.message = message

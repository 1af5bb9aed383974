"""Delivery-specific failures."""


class DeliveryUnavailable(Exception):
    """No active zone or shipping option covers the request."""

    def __init__(self, message: str = "Delivery not available for this location", postal_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.postal_code = postal_code

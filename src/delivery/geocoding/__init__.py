"""Geocoder adapter abstraction: pluggable address lookup service."""

import os

_geocoder_instance = None


def get_geocoder():
    """Return the configured geocoder adapter (singleton).

    Uses FakeGeocoder by default. In production, configure via
    GEOCODER_ADAPTER environment variable.
    """
    global _geocoder_instance
    if _geocoder_instance is None:
        adapter = os.environ.get("GEOCODER_ADAPTER", "fake")
        if adapter == "fake":
            from delivery.geocoding.fake_adapter import FakeGeocoder

            _geocoder_instance = FakeGeocoder()
        else:
            raise ValueError(f"Unknown geocoder adapter: {adapter}")
    return _geocoder_instance


def set_geocoder(geocoder) -> None:
    """Override the active geocoder (useful for tests)."""
    global _geocoder_instance
    _geocoder_instance = geocoder


def reset_geocoder():
    """Reset the geocoder singleton (useful for testing)."""
    global _geocoder_instance
    _geocoder_instance = None

"""Geocoder port: abstract interface for address lookup services.

Autocomplete returns ranked suggestions carrying an opaque place id; place
details and reverse geocoding resolve to a structured postal address.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class AddressSuggestion:
    place_id: str
    description: str
    main_text: str
    secondary_text: str
    types: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PostalAddress:
    street: str
    city: str
    state: str
    postal_code: str
    country: str = "US"
    latitude: float | None = None
    longitude: float | None = None


@dataclass(frozen=True)
class LocationBias:
    latitude: float
    longitude: float
    radius_meters: int = 50_000


class GeocoderPort(ABC):
    """Abstract interface for geocoder adapters."""

    @abstractmethod
    def autocomplete(
        self,
        partial: str,
        country: str = "US",
        bias: LocationBias | None = None,
    ) -> list[AddressSuggestion]:
        """Suggest addresses matching a partially typed string."""
        ...

    @abstractmethod
    def place_details(self, place_id: str) -> PostalAddress | None:
        """Resolve a suggestion's place id to a postal address."""
        ...

    @abstractmethod
    def reverse_geocode(self, latitude: float, longitude: float) -> PostalAddress | None:
        """Resolve coordinates to the nearest postal address."""
        ...

"""Fake geocoder: deterministic address lookup for testing and development.

Backed by a small gazetteer of Miami addresses. Configurable failure mode
for exercising upstream error handling.
"""

from delivery.geocoding.port import AddressSuggestion, GeocoderPort, LocationBias, PostalAddress
from shared.exceptions import UpstreamServiceError

_GAZETTEER = {
    "place-brickell-1": PostalAddress("1101 Brickell Ave", "Miami", "FL", "33131", "US", 25.7617, -80.1918),
    "place-flagler-2": PostalAddress("200 E Flagler St", "Miami", "FL", "33132", "US", 25.7743, -80.1889),
    "place-collins-3": PostalAddress("1500 Collins Ave", "Miami Beach", "FL", "33139", "US", 25.7869, -80.1301),
    "place-miracle-4": PostalAddress("300 Miracle Mile", "Coral Gables", "FL", "33134", "US", 25.7496, -80.2590),
    "place-aventura-5": PostalAddress("19501 Biscayne Blvd", "Aventura", "FL", "33180", "US", 25.9565, -80.1429),
    "place-orlando-6": PostalAddress("400 W Church St", "Orlando", "FL", "32801", "US", 28.5410, -81.3830),
}


def _describe(address: PostalAddress) -> str:
    return f"{address.street}, {address.city}, {address.state} {address.postal_code}"


def _distance_sq(address: PostalAddress, latitude: float, longitude: float) -> float:
    return (address.latitude - latitude) ** 2 + (address.longitude - longitude) ** 2


class FakeGeocoder(GeocoderPort):
    """Fake geocoder that answers from an in-memory gazetteer."""

    def __init__(self):
        self.should_succeed = True
        self.failure_reason = "Geocoding service unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Geocoding service unavailable"):
        """Configure the fake geocoder behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def _check(self) -> None:
        if not self.should_succeed:
            raise UpstreamServiceError("geocoder", self.failure_reason)

    def autocomplete(
        self,
        partial: str,
        country: str = "US",
        bias: LocationBias | None = None,
    ) -> list[AddressSuggestion]:
        self._check()
        needle = (partial or "").strip().lower()
        if len(needle) < 3:
            return []

        matches = [
            (place_id, address)
            for place_id, address in _GAZETTEER.items()
            if address.country == country and needle in _describe(address).lower()
        ]
        if bias is not None:
            matches.sort(key=lambda m: _distance_sq(m[1], bias.latitude, bias.longitude))
        else:
            matches.sort(key=lambda m: _describe(m[1]).lower().index(needle))

        return [
            AddressSuggestion(
                place_id=place_id,
                description=_describe(address),
                main_text=address.street,
                secondary_text=f"{address.city}, {address.state}",
                types=("street_address",),
            )
            for place_id, address in matches
        ]

    def place_details(self, place_id: str) -> PostalAddress | None:
        self._check()
        return _GAZETTEER.get(place_id)

    def reverse_geocode(self, latitude: float, longitude: float) -> PostalAddress | None:
        self._check()
        return min(_GAZETTEER.values(), key=lambda a: _distance_sq(a, latitude, longitude))

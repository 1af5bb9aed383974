"""Address validation for checkout forms.

Problems are returned as a list of messages for display next to the form,
never raised.
"""

import re
from dataclasses import dataclass, field

from delivery.zones import ZoneCatalog, get_catalog

_US_ZIP = re.compile(r"^\d{5}(-\d{4})?$")

_REQUIRED_FIELDS = (
    ("street", "Street address is required"),
    ("city", "City is required"),
    ("state", "State is required"),
    ("postal_code", "ZIP code is required"),
)


@dataclass(frozen=True)
class AddressValidationResult:
    is_valid: bool
    deliverable: bool = False
    errors: list[str] = field(default_factory=list)


def is_valid_zip_code(postal_code: str) -> bool:
    return bool(_US_ZIP.match((postal_code or "").strip()))


def validate_address(address: dict, catalog: ZoneCatalog | None = None) -> AddressValidationResult:
    catalog = catalog or get_catalog()
    errors = [message for key, message in _REQUIRED_FIELDS if not (address.get(key) or "").strip()]

    postal_code = (address.get("postal_code") or "").strip()
    if postal_code and not is_valid_zip_code(postal_code):
        errors.append("Invalid ZIP code format")

    if errors:
        return AddressValidationResult(is_valid=False, errors=errors)

    return AddressValidationResult(
        is_valid=True,
        deliverable=catalog.is_delivery_available(postal_code[:5]),
    )

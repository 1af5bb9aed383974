"""Store-local time.

Delivery windows are expressed in the store's timezone, configured through
``DELIVERY_TIMEZONE``.
"""

import os
from datetime import datetime
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "America/New_York"


def store_timezone() -> ZoneInfo:
    return ZoneInfo(os.environ.get("DELIVERY_TIMEZONE", DEFAULT_TIMEZONE))


def store_now() -> datetime:
    """Current time in the store's timezone."""
    return datetime.now(store_timezone())

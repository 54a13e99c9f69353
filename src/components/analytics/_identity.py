"""
Visitor identity and device class.

The network address is the only visitor proxy. Records without one are
counted as visits but never as visitors.
"""

from __future__ import annotations

from .models import DeviceClass, VisitRecord

# Widths strictly below this are mobile.
MOBILE_MAX_WIDTH = 768


def identity_of(record: VisitRecord) -> str | None:
    """Return the record's network address, or None if unattributable."""
    return record.ip or None


def is_mobile(record: VisitRecord, mobile_max_width: int = MOBILE_MAX_WIDTH) -> bool:
    """True iff screen width is known and below the mobile breakpoint."""
    return record.screen_width is not None and record.screen_width < mobile_max_width


def device_class(record: VisitRecord, mobile_max_width: int = MOBILE_MAX_WIDTH) -> DeviceClass:
    """Classify a record as desktop or mobile. Unknown width is desktop."""
    if is_mobile(record, mobile_max_width):
        return DeviceClass.MOBILE
    return DeviceClass.DESKTOP

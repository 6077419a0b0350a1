from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum


class ServiceLevel(str, Enum):
    basic = "basic"
    standard = "standard"
    enhanced = "enhanced"
    comprehensive = "comprehensive"


SERVICE_LEVEL_LABELS: dict[ServiceLevel, str] = {
    ServiceLevel.basic: "Basic First Aid",
    ServiceLevel.standard: "Standard Medical Cover",
    ServiceLevel.enhanced: "Enhanced Medical Cover",
    ServiceLevel.comprehensive: "Comprehensive (with Ambulance)",
}

SERVICE_LEVEL_MULTIPLIERS: dict[ServiceLevel, Decimal] = {
    ServiceLevel.basic: Decimal("1"),
    ServiceLevel.standard: Decimal("1.5"),
    ServiceLevel.enhanced: Decimal("2"),
    ServiceLevel.comprehensive: Decimal("3"),
}

# (inclusive upper bound on attendees, base rate); None means unbounded
ATTENDEE_BRACKETS: tuple[tuple[int | None, int], ...] = (
    (100, 250),
    (500, 450),
    (1000, 750),
    (5000, 1500),
    (None, 2500),
)

BASELINE_HOURS = 4

EVENT_TYPES: tuple[str, ...] = (
    "Festival",
    "Sporting Event",
    "Concert",
    "Corporate Event",
    "Wedding",
    "Private Party",
    "Marathon/Running Event",
    "Equestrian Event",
    "Charity Event",
    "Other",
)


def base_rate(attendees: int | None) -> int:
    count = attendees if attendees and attendees > 0 else 0
    for upper, rate in ATTENDEE_BRACKETS:
        if upper is None or count <= upper:
            return rate
    return ATTENDEE_BRACKETS[-1][1]


def service_multiplier(service_level: ServiceLevel | str | None) -> Decimal:
    if service_level is None:
        return Decimal("1")
    try:
        level = ServiceLevel(service_level)
    except ValueError:
        return Decimal("1")
    return SERVICE_LEVEL_MULTIPLIERS[level]


def duration_factor(duration_hours: int | None) -> Decimal:
    if not duration_hours or duration_hours <= 0:
        return Decimal("1")
    return max(Decimal("1"), Decimal(duration_hours) / BASELINE_HOURS)


def estimate(
    attendees: int | None,
    duration_hours: int | None,
    service_level: ServiceLevel | str | None,
) -> int:
    """
    Indicative price in whole currency units.

    Non-positive or missing attendees/duration count as unspecified; unknown
    service levels price as basic. Halves round up.
    """
    amount = Decimal(base_rate(attendees)) * service_multiplier(service_level) * duration_factor(duration_hours)
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

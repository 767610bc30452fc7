"""Closed vocabularies shared by config, engine and API."""

from __future__ import annotations

from enum import Enum, IntEnum


class EnergySourceKind(str, Enum):
    """Energy variant a dock is bound to at construction."""

    GRID = "Grid"
    SOLAR = "Solar"


class Weather(str, Enum):
    """Environmental condition driving solar output."""

    SUNNY = "Sunny"
    CLOUDY = "Cloudy"
    NIGHT = "Night"

    @classmethod
    def from_code(cls, code: int) -> Weather:
        """Operator menu codes: 0 Sunny, 1 Cloudy, 2 Night."""
        conditions = (cls.SUNNY, cls.CLOUDY, cls.NIGHT)
        if not 0 <= code < len(conditions):
            raise ValueError(f"Unknown weather code: {code}")
        return conditions[code]


class ChargingType(IntEnum):
    """Charging speed requested by the driver.  Codes match the booking form."""

    SLOW = 1
    MEDIUM = 2
    FAST = 3
    SOLAR = 4

    @property
    def label(self) -> str:
        return self.name.title()


# Nominal power (kW) a request asks for when no explicit rating is given.
NOMINAL_POWER_KW: dict[ChargingType, float] = {
    ChargingType.SLOW: 7.0,
    ChargingType.MEDIUM: 22.0,
    ChargingType.FAST: 50.0,
    ChargingType.SOLAR: 7.0,
}


class MembershipLevel(IntEnum):
    REGULAR = 0
    PREMIUM = 1

    @classmethod
    def parse(cls, code: int | MembershipLevel) -> MembershipLevel:
        """Unknown level codes register as Regular."""
        try:
            return cls(code)
        except ValueError:
            return cls.REGULAR


class BookingStatus(str, Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class RejectionReason(str, Enum):
    """Recoverable failure categories reported back to the caller."""

    CAPACITY_EXCEEDED = "CapacityExceeded"
    DUPLICATE_IDENTITY = "DuplicateIdentity"
    NOT_FOUND = "NotFound"
    INVALID_REQUEST = "InvalidRequest"
    NO_AVAILABLE_RESOURCE = "NoAvailableResource"
    INVALID_STATE = "InvalidState"

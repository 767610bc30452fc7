"""Domain records, vocabularies and result contracts."""

from evdock.models.enums import (
    BookingStatus,
    ChargingType,
    EnergySourceKind,
    MembershipLevel,
    RejectionReason,
    Weather,
)
from evdock.models.entities import Booking, Dock, User, Vehicle
from evdock.models.results import (
    BookingConfirmation,
    BookingSnapshot,
    CancellationReceipt,
    DischargeResult,
    DockStatus,
    InvariantViolation,
    Invoice,
    LiveSession,
    Notification,
    PowerOverview,
    Rejected,
    StationReport,
    UserRecord,
    VehicleRecord,
)

__all__ = [
    "BookingStatus",
    "ChargingType",
    "EnergySourceKind",
    "MembershipLevel",
    "RejectionReason",
    "Weather",
    "Booking",
    "Dock",
    "User",
    "Vehicle",
    "BookingConfirmation",
    "BookingSnapshot",
    "CancellationReceipt",
    "DischargeResult",
    "DockStatus",
    "InvariantViolation",
    "Invoice",
    "LiveSession",
    "Notification",
    "PowerOverview",
    "Rejected",
    "StationReport",
    "UserRecord",
    "VehicleRecord",
]

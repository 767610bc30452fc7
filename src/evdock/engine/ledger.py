"""Booking ledger — append-only record of every booking at a station.

Bookings are never removed; completion and cancellation only flip the
status.  The ledger is the source of truth for overlap checks, billing
and reporting.
"""

from __future__ import annotations

from typing import Iterator, Optional

from evdock.models.entities import Booking
from evdock.models.enums import BookingStatus
from evdock.models.results import InvariantViolation


def intervals_overlap(start_a: float, duration_a: float, start_b: float, duration_b: float) -> bool:
    """Half-open interval intersection: touching endpoints do not conflict."""
    return start_a < start_b + duration_b and start_b < start_a + duration_a


class BookingLedger:
    """Bounded, append-only booking store keyed by booking id."""

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._bookings: dict[int, Booking] = {}

    def __len__(self) -> int:
        return len(self._bookings)

    def __iter__(self) -> Iterator[Booking]:
        return iter(self._bookings.values())

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._bookings) >= self._capacity

    @property
    def next_booking_id(self) -> int:
        return len(self._bookings) + 1

    def append(self, booking: Booking) -> None:
        if self.is_full:
            raise InvariantViolation("append past ledger capacity")
        if booking.booking_id in self._bookings:
            raise InvariantViolation(f"booking id {booking.booking_id} reused")
        self._bookings[booking.booking_id] = booking

    def get(self, booking_id: int) -> Optional[Booking]:
        return self._bookings.get(booking_id)

    # ── Queries ─────────────────────────────────────────────────────────

    def active_on_dock(self, dock_id: int) -> list[Booking]:
        return [b for b in self._bookings.values() if b.is_active and b.dock_id == dock_id]

    def has_conflict(self, dock_id: int, start_time: float, duration: float) -> bool:
        """True if an active booking on ``dock_id`` overlaps the window."""
        return any(
            intervals_overlap(b.start_time, b.duration, start_time, duration)
            for b in self.active_on_dock(dock_id)
        )

    def for_user(self, user_id: int) -> list[Booking]:
        return [b for b in self._bookings.values() if b.user_id == user_id]

    def with_status(self, status: BookingStatus) -> list[Booking]:
        return [b for b in self._bookings.values() if b.status is status]

    def settled(self) -> list[Booking]:
        """Completed and cancelled bookings."""
        return [b for b in self._bookings.values() if not b.is_active]

    def latest_end_time(self, floor: float) -> float:
        return max([floor, *(b.end_time for b in self._bookings.values())])

"""Billing engine — settles a completed session.

Energy delivered is the dock's *current* available power × booked duration;
weather is read at completion, not at booking time.

Rate per kWh, applied in this order:

  a. base rate by charging type (Slow 0.20, Medium 0.30, Fast 0.40, Solar 0.15)
  b. × solar_discount          if charging type is Solar
  c. × peak_surcharge          if the stored (effective) start is in the peak window
  d. × source rate_adjustment  (Grid 1.0, Solar 0.9)

Cost = energy × rate, then × premium_discount for Premium members.
"""

from __future__ import annotations

import logging
from typing import Union

from evdock.config.policy import PeakPolicy
from evdock.config.tariff import TariffConfig
from evdock.engine.allocation import is_peak_hour
from evdock.engine.docks import DockPool
from evdock.engine.energy import EnergySourceProfile
from evdock.engine.ledger import BookingLedger
from evdock.models.entities import clamp_soc
from evdock.models.enums import BookingStatus, ChargingType, RejectionReason
from evdock.models.results import InvariantViolation, Invoice, Rejected
from evdock.notifications import NotificationSink
from evdock.registry import UserRegistry, VehicleRegistry

logger = logging.getLogger(__name__)


def base_rate(charging_type: ChargingType, tariff: TariffConfig) -> float:
    return {
        ChargingType.SLOW: tariff.slow_rate_per_kwh,
        ChargingType.MEDIUM: tariff.medium_rate_per_kwh,
        ChargingType.FAST: tariff.fast_rate_per_kwh,
        ChargingType.SOLAR: tariff.solar_rate_per_kwh,
    }[charging_type]


def compute_rate(
    charging_type: ChargingType,
    start_time: float,
    source: EnergySourceProfile,
    tariff: TariffConfig,
    peak: PeakPolicy,
) -> float:
    """Rate per kWh before any membership discount."""
    rate = base_rate(charging_type, tariff)
    if charging_type is ChargingType.SOLAR:
        rate *= tariff.solar_discount
    if is_peak_hour(start_time, peak):
        rate *= tariff.peak_surcharge
    rate *= source.rate_adjustment
    return rate


def compute_cost(energy_kwh: float, rate_per_kwh: float, premium: bool, tariff: TariffConfig) -> float:
    cost = energy_kwh * rate_per_kwh
    if premium:
        cost *= tariff.premium_discount
    return cost


class BillingEngine:
    """Completes bookings: energy, SOC, dock statistics, cost."""

    def __init__(
        self,
        pool: DockPool,
        ledger: BookingLedger,
        users: UserRegistry,
        vehicles: VehicleRegistry,
        notifier: NotificationSink,
        tariff: TariffConfig,
        peak: PeakPolicy,
    ) -> None:
        self._pool = pool
        self._ledger = ledger
        self._users = users
        self._vehicles = vehicles
        self._notifier = notifier
        self._tariff = tariff
        self._peak = peak

    def complete_booking(self, booking_id: int) -> Union[Invoice, Rejected]:
        booking = self._ledger.get(booking_id)
        if booking is None:
            return Rejected(reason=RejectionReason.NOT_FOUND, message=f"Booking {booking_id} not found")
        if not booking.is_active:
            return Rejected(
                reason=RejectionReason.INVALID_STATE,
                message=f"Booking {booking_id} is {booking.status.value}, not Active",
            )

        dock = self._pool.require(booking.dock_id)
        source = self._pool.profile(dock)
        vehicle = self._vehicles.lookup(booking.vehicle_id)
        if vehicle is None:
            raise InvariantViolation(f"booking {booking_id} references unknown vehicle {booking.vehicle_id}")
        user = self._users.lookup(booking.user_id)
        premium = user is not None and user.is_premium

        # ── 1. Energy & statistics ──────────────────────────────────────
        energy = self._pool.available_power(dock) * booking.duration
        dock.occupied_hours += booking.duration
        vehicle.battery_soc = clamp_soc(vehicle.battery_soc + energy / vehicle.battery_capacity_kwh * 100.0)

        # ── 2. Price ────────────────────────────────────────────────────
        rate = compute_rate(booking.charging_type, booking.start_time, source, self._tariff, self._peak)
        cost = compute_cost(energy, rate, premium, self._tariff)

        # ── 3. Transition ───────────────────────────────────────────────
        booking.status = BookingStatus.COMPLETED
        booking.energy_consumed = energy
        booking.cost = cost
        dock.release()

        logger.info(
            "Invoice booking=%d user=%d vehicle=%d energy=%.2f kWh rate=$%.4f/kWh cost=$%.2f",
            booking_id, booking.user_id, booking.vehicle_id, energy, rate, cost,
        )
        self._notifier.notify(booking.user_id, "Charging session completed. Energy consumed:", energy)
        self._notifier.notify(booking.user_id, "Total cost for the session: $", cost)

        return Invoice(
            booking_id=booking_id,
            user_id=booking.user_id,
            vehicle_id=booking.vehicle_id,
            dock_id=dock.dock_id,
            source=dock.source,
            charging_type=booking.charging_type,
            energy_kwh=energy,
            rate_per_kwh=rate,
            premium_discount_applied=premium,
            cost=cost,
            vehicle_soc_after=vehicle.battery_soc,
        )

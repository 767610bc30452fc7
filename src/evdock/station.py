"""Station and Network — the units of isolation.

A ``Station`` owns one dock pool, one booking ledger and its registries,
and serialises every operation behind a single re-entrant lock.  A
``Network`` is a fixed set of independent stations that share nothing
but the weather.

Every operation returns either its result model or a ``Rejected``; the
station logs each rejection at WARNING.
"""

from __future__ import annotations

import logging
import math
import threading
from typing import Optional, TypeVar, Union

from evdock.config.network import NetworkConfig
from evdock.engine.allocation import AllocationEngine
from evdock.engine.billing import BillingEngine
from evdock.engine.docks import DockPool
from evdock.engine.energy import GLOBAL_WEATHER, WeatherState, build_energy_sources
from evdock.engine.ledger import BookingLedger
from evdock.engine.reporting import generate_report, live_sessions, power_overview
from evdock.engine.v2g import discharge_to_grid
from evdock.models.entities import Booking, User, Vehicle
from evdock.models.enums import ChargingType, MembershipLevel, RejectionReason, Weather
from evdock.models.results import (
    BookingConfirmation,
    BookingSnapshot,
    CancellationReceipt,
    DischargeResult,
    DockStatus,
    Invoice,
    LiveSession,
    PowerOverview,
    Rejected,
    StationReport,
    UserRecord,
    VehicleRecord,
)
from evdock.notifications import LoggingNotifier, NotificationSink
from evdock.registry import UserRegistry, VehicleRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _snapshot(booking: Booking) -> BookingSnapshot:
    return BookingSnapshot(
        booking_id=booking.booking_id,
        user_id=booking.user_id,
        vehicle_id=booking.vehicle_id,
        dock_id=booking.dock_id,
        station_id=booking.station_id,
        requested_start_time=booking.requested_start_time,
        start_time=booking.start_time,
        duration=booking.duration,
        charging_type=booking.charging_type,
        status=booking.status,
        cost=booking.cost,
        energy_consumed=booking.energy_consumed,
        cancellation_penalty=booking.cancellation_penalty,
        deferred=booking.was_deferred,
    )


def _user_record(user: User) -> UserRecord:
    return UserRecord(user_id=user.user_id, name=user.name, membership=user.membership)


def _vehicle_record(vehicle: Vehicle) -> VehicleRecord:
    return VehicleRecord(
        vehicle_id=vehicle.vehicle_id,
        user_id=vehicle.user_id,
        battery_soc=vehicle.battery_soc,
        battery_capacity_kwh=vehicle.battery_capacity_kwh,
        supports_v2g=vehicle.supports_v2g,
    )


class Station:
    """One charging station.

    Usage::

        station = Station(1, NetworkConfig())
        station.register_user(1, "Ada", MembershipLevel.PREMIUM)
        station.register_vehicle(10, 1, soc=50, capacity_kwh=40, supports_v2g=False)
        confirmation = station.request_booking(1, 10, 13.0, 2.0, ChargingType.MEDIUM)
        invoice = station.complete_booking(confirmation.booking_id)
    """

    def __init__(
        self,
        station_id: int,
        config: NetworkConfig,
        weather: Optional[WeatherState] = None,
        notifier: Optional[NotificationSink] = None,
    ) -> None:
        self.station_id = station_id
        self._config = config
        self._lock = threading.RLock()
        self._notifier = notifier if notifier is not None else LoggingNotifier()

        sources = build_energy_sources(config.energy)
        self._pool = DockPool(config.station.docks, sources, weather if weather is not None else GLOBAL_WEATHER)
        self._ledger = BookingLedger(config.station.max_bookings)
        self._users = UserRegistry(config.station.max_users)
        self._vehicles = VehicleRegistry(config.station.max_vehicles)

        self._allocation = AllocationEngine(
            station_id, self._pool, self._ledger, self._users, self._vehicles,
            self._notifier, config.peak, config.cancellation,
        )
        self._billing = BillingEngine(
            self._pool, self._ledger, self._users, self._vehicles,
            self._notifier, config.tariff, config.peak,
        )

    @property
    def system_start_time(self) -> float:
        return self._allocation.system_start_time

    def _checked(self, operation: str, result: Union[T, Rejected]) -> Union[T, Rejected]:
        if isinstance(result, Rejected):
            logger.warning(
                "Station %d %s rejected (%s): %s",
                self.station_id, operation, result.reason.value, result.message,
            )
        return result

    # ── Registry ────────────────────────────────────────────────────────

    def register_user(
        self, user_id: int, name: str, membership: Union[int, MembershipLevel] = MembershipLevel.REGULAR,
    ) -> Union[UserRecord, Rejected]:
        with self._lock:
            result = self._users.register(user_id, name, membership)
            if isinstance(result, Rejected):
                return self._checked("register_user", result)
            logger.info("Station %d: registered user %d", self.station_id, user_id)
            return _user_record(result)

    def register_vehicle(
        self,
        vehicle_id: int,
        user_id: int,
        soc: float,
        capacity_kwh: float,
        supports_v2g: bool = False,
    ) -> Union[VehicleRecord, Rejected]:
        with self._lock:
            owner = self._users.lookup(user_id)
            result = self._vehicles.register(vehicle_id, owner, soc, capacity_kwh, supports_v2g)
            if isinstance(result, Rejected):
                return self._checked("register_vehicle", result)
            logger.info("Station %d: registered vehicle %d for user %d", self.station_id, vehicle_id, user_id)
            return _vehicle_record(result)

    def lookup_user(self, user_id: int) -> Optional[UserRecord]:
        with self._lock:
            user = self._users.lookup(user_id)
            return _user_record(user) if user is not None else None

    def lookup_vehicle(self, vehicle_id: int) -> Optional[VehicleRecord]:
        with self._lock:
            vehicle = self._vehicles.lookup(vehicle_id)
            return _vehicle_record(vehicle) if vehicle is not None else None

    # ── Booking lifecycle ───────────────────────────────────────────────

    def request_booking(
        self,
        user_id: int,
        vehicle_id: int,
        start_time: float,
        duration: float,
        charging_type: Union[int, ChargingType],
        power_rating_kw: Optional[float] = None,
    ) -> Union[BookingConfirmation, Rejected]:
        with self._lock:
            return self._checked("request_booking", self._allocation.request_booking(
                user_id, vehicle_id, start_time, duration, charging_type, power_rating_kw,
            ))

    def cancel_booking(self, booking_id: int) -> Union[CancellationReceipt, Rejected]:
        with self._lock:
            return self._checked("cancel_booking", self._allocation.cancel_booking(booking_id))

    def complete_booking(self, booking_id: int) -> Union[Invoice, Rejected]:
        with self._lock:
            return self._checked("complete_booking", self._billing.complete_booking(booking_id))

    def discharge_to_grid(self, vehicle_id: int, energy_kwh: float) -> Union[DischargeResult, Rejected]:
        with self._lock:
            vehicle = self._vehicles.lookup(vehicle_id)
            if vehicle is None:
                return self._checked("discharge_to_grid", Rejected(
                    reason=RejectionReason.NOT_FOUND, message=f"Vehicle {vehicle_id} not found",
                ))
            if not math.isfinite(energy_kwh) or energy_kwh < 0:
                return self._checked("discharge_to_grid", Rejected(
                    reason=RejectionReason.INVALID_REQUEST,
                    message=f"Discharge energy must be a non-negative number, got {energy_kwh}",
                ))
            discharged = discharge_to_grid(vehicle, energy_kwh)
            logger.info("Station %d: vehicle %d discharged %.2f kWh", self.station_id, vehicle_id, discharged)
            return DischargeResult(
                vehicle_id=vehicle_id,
                requested_kwh=energy_kwh,
                discharged_kwh=discharged,
                battery_soc=vehicle.battery_soc,
            )

    # ── Read side ───────────────────────────────────────────────────────

    def get_dock_status(self) -> list[DockStatus]:
        with self._lock:
            return self._pool.status()

    def get_user_bookings(self, user_id: int) -> list[BookingSnapshot]:
        with self._lock:
            return [_snapshot(b) for b in self._ledger.for_user(user_id)]

    def get_booking(self, booking_id: int) -> Optional[BookingSnapshot]:
        with self._lock:
            booking = self._ledger.get(booking_id)
            return _snapshot(booking) if booking is not None else None

    def generate_report(self) -> StationReport:
        with self._lock:
            return generate_report(
                self.station_id, self._pool, self._ledger, self._users, self.system_start_time,
            )

    def live_sessions(self, current_time: Optional[float] = None) -> list[LiveSession]:
        with self._lock:
            return live_sessions(self._pool, self._ledger, self.system_start_time, current_time)

    def current_power_draw_kw(self) -> float:
        with self._lock:
            return self._pool.current_power_draw()

    def power_overview(self) -> PowerOverview:
        with self._lock:
            return power_overview(self._pool, self._config.station.grid_capacity_kw)


class Network:
    """Fixed set of independent stations numbered 1..N sharing one weather state."""

    def __init__(
        self,
        config: Optional[NetworkConfig] = None,
        weather: Optional[WeatherState] = None,
        notifier: Optional[NotificationSink] = None,
    ) -> None:
        self.config = config if config is not None else NetworkConfig()
        self.weather = weather if weather is not None else GLOBAL_WEATHER
        self._stations = {
            sid: Station(sid, self.config, self.weather, notifier)
            for sid in range(1, self.config.num_stations + 1)
        }

    def __len__(self) -> int:
        return len(self._stations)

    def station(self, station_id: int) -> Optional[Station]:
        return self._stations.get(station_id)

    def stations(self) -> list[Station]:
        return list(self._stations.values())

    def set_weather(self, condition: Union[Weather, str, int]) -> Weather:
        """Change the weather for every station.  Accepts a name or a menu code (0, 1, 2)."""
        weather = Weather.from_code(condition) if isinstance(condition, int) else Weather(condition)
        self.weather.set(weather)
        return weather

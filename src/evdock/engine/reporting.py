"""Reporting — read-side aggregation over the ledger and dock statistics.

utilization % = Σ dock.occupied_hours / (elapsed × dock_count) × 100
  elapsed = max(system_start_time, latest booking end) − system_start_time

Energy shares, revenue and CO2 are taken from settled bookings; a
cancelled booking carries zero cost and zero energy, so in practice only
completed sessions contribute.
"""

from __future__ import annotations

from typing import Optional

from evdock.engine.docks import DockPool
from evdock.engine.ledger import BookingLedger
from evdock.models.enums import BookingStatus, EnergySourceKind
from evdock.models.results import LiveSession, PowerOverview, StationReport
from evdock.registry import UserRegistry

# Simulated clock offset used when no explicit time is given.
DEFAULT_LIVE_OFFSET_HOURS = 1.0


def _pct(part: float, whole: float) -> float:
    return part / whole * 100.0 if whole > 0 else 0.0


def generate_report(
    station_id: int,
    pool: DockPool,
    ledger: BookingLedger,
    users: UserRegistry,
    system_start_time: float,
) -> StationReport:
    """Aggregate station analytics.  Pure: nothing is mutated."""

    # ── Utilisation ─────────────────────────────────────────────────────
    elapsed = ledger.latest_end_time(system_start_time) - system_start_time if len(ledger) else 0.0
    utilization = _pct(pool.total_occupied_hours(), elapsed * len(pool))

    # ── Session duration ────────────────────────────────────────────────
    completed = ledger.with_status(BookingStatus.COMPLETED)
    avg_duration = sum(b.duration for b in completed) / len(completed) if completed else 0.0

    # ── Energy mix, revenue, emissions ──────────────────────────────────
    grid_energy = 0.0
    solar_energy = 0.0
    revenue = 0.0
    co2 = 0.0
    for booking in ledger.settled():
        dock = pool.require(booking.dock_id)
        if dock.source is EnergySourceKind.GRID:
            grid_energy += booking.energy_consumed
        else:
            solar_energy += booking.energy_consumed
        revenue += booking.cost
        co2 += pool.profile(dock).co2_kg(booking.energy_consumed)
    total_energy = grid_energy + solar_energy

    # ── Demand by membership ────────────────────────────────────────────
    regular = 0
    premium = 0
    for booking in ledger:
        user = users.lookup(booking.user_id)
        if user is None:
            continue
        if user.is_premium:
            premium += 1
        else:
            regular += 1

    cancelled = ledger.with_status(BookingStatus.CANCELLED)
    return StationReport(
        station_id=station_id,
        utilization_pct=utilization,
        avg_session_duration_hours=avg_duration,
        grid_share_pct=_pct(grid_energy, total_energy),
        solar_share_pct=_pct(solar_energy, total_energy),
        regular_bookings=regular,
        premium_bookings=premium,
        total_revenue=revenue,
        co2_kg=co2,
        active_bookings=len(ledger.with_status(BookingStatus.ACTIVE)),
        completed_bookings=len(completed),
        cancelled_bookings=len(cancelled),
        total_energy_kwh=total_energy,
        total_penalties=sum(b.cancellation_penalty for b in cancelled),
    )


def live_sessions(
    pool: DockPool,
    ledger: BookingLedger,
    system_start_time: float,
    current_time: Optional[float] = None,
) -> list[LiveSession]:
    """Progress of each active booking at ``current_time``.

    Defaults to one hour after the station's anchor time.
    """
    now = system_start_time + DEFAULT_LIVE_OFFSET_HOURS if current_time is None else current_time
    sessions: list[LiveSession] = []
    for booking in ledger.with_status(BookingStatus.ACTIVE):
        dock = pool.require(booking.dock_id)
        elapsed = min(max(now - booking.start_time, 0.0), booking.duration)
        sessions.append(LiveSession(
            booking_id=booking.booking_id,
            vehicle_id=booking.vehicle_id,
            dock_id=dock.dock_id,
            elapsed_hours=elapsed,
            energy_delivered_kwh=pool.available_power(dock) * elapsed,
            remaining_hours=booking.duration - elapsed,
        ))
    return sessions


def power_overview(pool: DockPool, grid_capacity_kw: float) -> PowerOverview:
    draw = pool.current_power_draw()
    return PowerOverview(
        current_draw_kw=draw,
        grid_capacity_kw=grid_capacity_kw,
        headroom_kw=grid_capacity_kw - draw,
    )

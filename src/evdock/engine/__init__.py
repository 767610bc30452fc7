"""Engine — energy policy, dock pool, ledger, allocation, billing, reporting."""

from evdock.engine.energy import GLOBAL_WEATHER, EnergySourceProfile, WeatherState, build_energy_sources
from evdock.engine.docks import DockPool
from evdock.engine.ledger import BookingLedger, intervals_overlap
from evdock.engine.allocation import (
    AllocationEngine,
    cancellation_penalty,
    find_available_dock,
    is_critical,
    is_peak_hour,
)
from evdock.engine.billing import BillingEngine, compute_cost, compute_rate
from evdock.engine.reporting import generate_report, live_sessions, power_overview
from evdock.engine.v2g import discharge_to_grid

__all__ = [
    "GLOBAL_WEATHER",
    "EnergySourceProfile",
    "WeatherState",
    "build_energy_sources",
    "DockPool",
    "BookingLedger",
    "intervals_overlap",
    "AllocationEngine",
    "cancellation_penalty",
    "find_available_dock",
    "is_critical",
    "is_peak_hour",
    "BillingEngine",
    "compute_cost",
    "compute_rate",
    "generate_report",
    "live_sessions",
    "power_overview",
    "discharge_to_grid",
]

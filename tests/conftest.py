"""Shared test fixtures — a default five-dock station with a few drivers.

Default layout:
  dock 1  Slow    7 kW  Grid
  dock 2  Slow    7 kW  Solar
  dock 3  Medium 22 kW  Grid
  dock 4  Medium 22 kW  Solar
  dock 5  Fast   50 kW  Grid

Drivers:
  user 1  Regular   vehicle 10 (SOC 50, 40 kWh, no V2G)
                    vehicle 11 (SOC 10, 40 kWh, no V2G)  ← critical by SOC
  user 2  Premium   vehicle 20 (SOC 50, 40 kWh, V2G)
"""

from __future__ import annotations

import pytest

from evdock.config import DockSpec, NetworkConfig, StationConfig
from evdock.engine.energy import WeatherState
from evdock.models.enums import EnergySourceKind, MembershipLevel
from evdock.notifications import RecordingNotifier
from evdock.station import Station


@pytest.fixture
def weather() -> WeatherState:
    """Isolated weather so tests never touch the process-wide default."""
    return WeatherState()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def config() -> NetworkConfig:
    return NetworkConfig()


@pytest.fixture
def grid_only_config() -> NetworkConfig:
    return NetworkConfig(
        station=StationConfig(docks=[
            DockSpec(dock_id=1, power_rating_kw=7.0, source=EnergySourceKind.GRID),
            DockSpec(dock_id=3, power_rating_kw=22.0, source=EnergySourceKind.GRID),
            DockSpec(dock_id=5, power_rating_kw=50.0, source=EnergySourceKind.GRID),
        ]),
    )


def populate(station: Station) -> Station:
    station.register_user(1, "Alice", MembershipLevel.REGULAR)
    station.register_user(2, "Bob", MembershipLevel.PREMIUM)
    station.register_vehicle(10, 1, soc=50.0, capacity_kwh=40.0, supports_v2g=False)
    station.register_vehicle(11, 1, soc=10.0, capacity_kwh=40.0, supports_v2g=False)
    station.register_vehicle(20, 2, soc=50.0, capacity_kwh=40.0, supports_v2g=True)
    return station


@pytest.fixture
def station(config: NetworkConfig, weather: WeatherState, notifier: RecordingNotifier) -> Station:
    return populate(Station(1, config, weather, notifier))


@pytest.fixture
def make_station(weather: WeatherState, notifier: RecordingNotifier):
    """Factory for a populated station with a custom config."""
    def _make(config: NetworkConfig) -> Station:
        return populate(Station(1, config, weather, notifier))
    return _make

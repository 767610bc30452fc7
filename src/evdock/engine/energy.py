"""Energy-source policy — a closed Grid | Solar dispatch table.

Each variant resolves to an immutable ``EnergySourceProfile``:

  rate_adjustment        tariff multiplier applied at billing
  co2_kg(energy)         emissions attributed to ``energy`` kWh
  available_power(P, w)  deliverable power for nominal ``P`` under weather ``w``

Grid always delivers nominal power.  Solar delivers nominal power when
sunny, ``cloudy_solar_factor`` × nominal when cloudy, nothing at night.

``WeatherState`` is the one piece of process-wide mutable state.  It is
shared by every dock pool in a network; writes are last-writer-wins and
visible to the next read.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from evdock.config.energy import EnergyConfig
from evdock.models.enums import EnergySourceKind, Weather

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Weather
# ═══════════════════════════════════════════════════════════════════════════

class WeatherState:
    """Shared, lock-protected weather condition.

    Usage::

        weather = WeatherState()
        weather.set(Weather.CLOUDY)
        weather.current  # → Weather.CLOUDY
    """

    def __init__(self, initial: Weather = Weather.SUNNY) -> None:
        self._lock = threading.Lock()
        self._current = initial

    @property
    def current(self) -> Weather:
        with self._lock:
            return self._current

    def set(self, condition: Weather) -> None:
        with self._lock:
            previous, self._current = self._current, condition
        logger.info("Weather changed: %s -> %s", previous.value, condition.value)


# Process-wide default shared by networks that are not given their own.
GLOBAL_WEATHER = WeatherState()


# ═══════════════════════════════════════════════════════════════════════════
# Dispatch table
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EnergySourceProfile:
    """Immutable behaviour of one energy-source variant."""

    kind: EnergySourceKind
    rate_adjustment: float
    co2_kg_per_kwh: float
    sunny_factor: float
    cloudy_factor: float
    night_factor: float

    @property
    def name(self) -> str:
        return self.kind.value

    def co2_kg(self, energy_kwh: float) -> float:
        return energy_kwh * self.co2_kg_per_kwh

    def available_power(self, power_rating_kw: float, weather: Weather) -> float:
        if weather is Weather.SUNNY:
            factor = self.sunny_factor
        elif weather is Weather.CLOUDY:
            factor = self.cloudy_factor
        else:
            factor = self.night_factor
        return power_rating_kw * factor


def build_energy_sources(config: EnergyConfig) -> dict[EnergySourceKind, EnergySourceProfile]:
    """Build the dispatch table for every variant."""
    return {
        EnergySourceKind.GRID: EnergySourceProfile(
            kind=EnergySourceKind.GRID,
            rate_adjustment=config.grid_rate_adjustment,
            co2_kg_per_kwh=config.grid_co2_kg_per_kwh,
            sunny_factor=1.0,
            cloudy_factor=1.0,
            night_factor=1.0,
        ),
        EnergySourceKind.SOLAR: EnergySourceProfile(
            kind=EnergySourceKind.SOLAR,
            rate_adjustment=config.solar_rate_adjustment,
            co2_kg_per_kwh=config.solar_co2_kg_per_kwh,
            sunny_factor=1.0,
            cloudy_factor=config.cloudy_solar_factor,
            night_factor=0.0,
        ),
    }

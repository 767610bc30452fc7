"""Dock pool — the fixed set of charging resources at one station."""

from __future__ import annotations

from typing import Iterator, Optional

from evdock.config.station import DockSpec
from evdock.engine.energy import EnergySourceProfile, WeatherState
from evdock.models.entities import Dock
from evdock.models.enums import EnergySourceKind
from evdock.models.results import DockStatus, InvariantViolation


class DockPool:
    """Docks in selection order, each bound to one energy-source profile.

    Parameters
    ----------
    specs : list[DockSpec]
        Layout; iteration order is dock-selection order.
    sources : dict[EnergySourceKind, EnergySourceProfile]
        Dispatch table from ``build_energy_sources``.
    weather : WeatherState
        Shared weather; read on every power query, never cached.
    """

    def __init__(
        self,
        specs: list[DockSpec],
        sources: dict[EnergySourceKind, EnergySourceProfile],
        weather: WeatherState,
    ) -> None:
        self._sources = sources
        self._weather = weather
        self._docks: dict[int, Dock] = {
            spec.dock_id: Dock(
                dock_id=spec.dock_id,
                power_rating_kw=spec.power_rating_kw,
                source=spec.source,
            )
            for spec in specs
        }

    def __iter__(self) -> Iterator[Dock]:
        return iter(self._docks.values())

    def __len__(self) -> int:
        return len(self._docks)

    def get(self, dock_id: int) -> Optional[Dock]:
        return self._docks.get(dock_id)

    def require(self, dock_id: int) -> Dock:
        """Dock referenced by a booking; absence means the ledger is corrupt."""
        dock = self._docks.get(dock_id)
        if dock is None:
            raise InvariantViolation(f"booking references unknown dock {dock_id}")
        return dock

    # ── Energy-source queries ───────────────────────────────────────────

    def profile(self, dock: Dock) -> EnergySourceProfile:
        profile = self._sources.get(dock.source)
        if profile is None:
            raise InvariantViolation(f"dock {dock.dock_id} has no bound energy source")
        return profile

    def available_power(self, dock: Dock) -> float:
        """Power the dock can deliver right now (kW)."""
        return self.profile(dock).available_power(dock.power_rating_kw, self._weather.current)

    def is_solar(self, dock: Dock) -> bool:
        return dock.source is EnergySourceKind.SOLAR

    # ── Aggregates ──────────────────────────────────────────────────────

    def current_power_draw(self) -> float:
        return sum(self.available_power(d) for d in self._docks.values() if d.occupied)

    def total_occupied_hours(self) -> float:
        return sum(d.occupied_hours for d in self._docks.values())

    def status(self) -> list[DockStatus]:
        return [
            DockStatus(
                dock_id=d.dock_id,
                power_rating_kw=d.power_rating_kw,
                source_name=self.profile(d).name,
                available_power_kw=self.available_power(d),
                occupied=d.occupied,
                occupant_vehicle_id=d.current_vehicle_id,
            )
            for d in self._docks.values()
        ]

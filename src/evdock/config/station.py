"""Station layout and capacity limits."""

from pydantic import BaseModel, Field, field_validator

from evdock.models.enums import EnergySourceKind


class DockSpec(BaseModel):
    """One physical dock.  Its energy source is fixed for the dock's lifetime."""

    dock_id: int = Field(ge=1, description="Dock identifier, unique within the station")
    power_rating_kw: float = Field(gt=0, description="Nominal power rating (kW)")
    source: EnergySourceKind = Field(default=EnergySourceKind.GRID, description="Bound energy source")


def _default_docks() -> list[DockSpec]:
    return [
        DockSpec(dock_id=1, power_rating_kw=7.0, source=EnergySourceKind.GRID),
        DockSpec(dock_id=2, power_rating_kw=7.0, source=EnergySourceKind.SOLAR),
        DockSpec(dock_id=3, power_rating_kw=22.0, source=EnergySourceKind.GRID),
        DockSpec(dock_id=4, power_rating_kw=22.0, source=EnergySourceKind.SOLAR),
        DockSpec(dock_id=5, power_rating_kw=50.0, source=EnergySourceKind.GRID),
    ]


class StationConfig(BaseModel):
    """Station-level inputs: dock layout and registry / ledger bounds."""

    docks: list[DockSpec] = Field(
        default_factory=_default_docks,
        description="Dock layout in selection order. Default: Slow/Medium pairs on "
                    "grid and solar plus one fast grid dock.",
    )
    max_users: int = Field(default=10, ge=1, description="Registered users per station")
    max_vehicles: int = Field(default=10, ge=1, description="Registered vehicles per station")
    max_bookings: int = Field(default=20, ge=1, description="Ledger capacity (all statuses)")
    grid_capacity_kw: float = Field(default=150.0, gt=0, description="Site grid connection limit (kW)")

    @field_validator("docks")
    @classmethod
    def _unique_dock_ids(cls, docks: list[DockSpec]) -> list[DockSpec]:
        if not docks:
            raise ValueError("a station needs at least one dock")
        ids = [d.dock_id for d in docks]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate dock ids: {ids}")
        return docks

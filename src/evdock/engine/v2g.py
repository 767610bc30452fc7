"""Vehicle-to-grid discharge — a pure vehicle-state operation."""

from __future__ import annotations

from evdock.models.entities import Vehicle, clamp_soc


def discharge_to_grid(vehicle: Vehicle, energy_requested_kwh: float) -> float:
    """Discharge up to ``energy_requested_kwh`` from the battery.

    Returns the energy actually discharged (kWh); 0 for non-V2G vehicles.
    """
    if not vehicle.supports_v2g:
        return 0.0
    discharged = min(energy_requested_kwh, vehicle.stored_energy_kwh)
    vehicle.battery_soc = clamp_soc(
        vehicle.battery_soc - discharged / vehicle.battery_capacity_kwh * 100.0
    )
    return discharged

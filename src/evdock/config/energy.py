"""Energy-source parameters — Grid vs Solar behaviour and emission factors."""

from pydantic import BaseModel, Field


class EnergyConfig(BaseModel):
    """Per-variant multipliers used by the energy-source dispatch table."""

    grid_rate_adjustment: float = Field(default=1.0, gt=0, description="Tariff multiplier for grid-backed docks")
    solar_rate_adjustment: float = Field(default=0.9, gt=0, description="Tariff multiplier for solar-backed docks")
    grid_co2_kg_per_kwh: float = Field(default=0.5, ge=0, description="Grid emission factor (kg CO2 / kWh)")
    solar_co2_kg_per_kwh: float = Field(default=0.0, ge=0, description="Solar emission factor (kg CO2 / kWh)")
    cloudy_solar_factor: float = Field(
        default=0.5, ge=0, le=1.0,
        description="Fraction of nominal power a solar dock delivers under cloud cover. "
                    "Sunny = 1.0, Night = 0.0 are fixed.",
    )

"""Charging tariff — base rates, surcharges and discounts."""

from pydantic import BaseModel, Field


class TariffConfig(BaseModel):
    """Price per kWh by charging type plus the multipliers applied at completion.

    Multipliers are applied in a fixed order: solar discount, peak surcharge,
    energy-source adjustment, then the membership discount on the final cost.
    """

    slow_rate_per_kwh: float = Field(default=0.2, ge=0, description="Base rate for Slow charging ($/kWh)")
    medium_rate_per_kwh: float = Field(default=0.3, ge=0, description="Base rate for Medium charging ($/kWh)")
    fast_rate_per_kwh: float = Field(default=0.4, ge=0, description="Base rate for Fast charging ($/kWh)")
    solar_rate_per_kwh: float = Field(default=0.15, ge=0, description="Base rate for Solar charging ($/kWh)")
    solar_discount: float = Field(default=0.85, gt=0, le=1.0, description="Multiplier for Solar charging type")
    peak_surcharge: float = Field(default=1.2, ge=1.0, description="Multiplier when the session starts in peak hours")
    premium_discount: float = Field(default=0.85, gt=0, le=1.0, description="Multiplier on cost for Premium members")

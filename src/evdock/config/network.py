"""Top-level config — bundles every input of a charging network."""

from pydantic import BaseModel, Field

from evdock.config.energy import EnergyConfig
from evdock.config.logging import LoggingSettings
from evdock.config.policy import CancellationPolicy, PeakPolicy
from evdock.config.station import StationConfig
from evdock.config.tariff import TariffConfig


class NetworkConfig(BaseModel):
    """Complete input bundle.  Every station in the network shares this layout."""

    num_stations: int = Field(default=3, ge=1, description="Independent stations, numbered 1..N")
    station: StationConfig = Field(default_factory=StationConfig)
    energy: EnergyConfig = Field(default_factory=EnergyConfig)
    tariff: TariffConfig = Field(default_factory=TariffConfig)
    peak: PeakPolicy = Field(default_factory=PeakPolicy)
    cancellation: CancellationPolicy = Field(default_factory=CancellationPolicy)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

"""Configuration models — every tunable input of the scheduler."""

from evdock.config.energy import EnergyConfig
from evdock.config.tariff import TariffConfig
from evdock.config.policy import PeakPolicy, CancellationPolicy
from evdock.config.station import DockSpec, StationConfig
from evdock.config.logging import LoggingSettings
from evdock.config.network import NetworkConfig
from evdock.config.loader import load_network_config

__all__ = [
    "EnergyConfig",
    "TariffConfig",
    "PeakPolicy",
    "CancellationPolicy",
    "DockSpec",
    "StationConfig",
    "LoggingSettings",
    "NetworkConfig",
    "load_network_config",
]

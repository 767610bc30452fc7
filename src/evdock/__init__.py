"""EV charging dock booking scheduler."""

from evdock.config import NetworkConfig, StationConfig, load_network_config
from evdock.models import ChargingType, MembershipLevel, Rejected, RejectionReason, Weather
from evdock.station import Network, Station

__all__ = [
    "NetworkConfig",
    "StationConfig",
    "load_network_config",
    "ChargingType",
    "MembershipLevel",
    "Rejected",
    "RejectionReason",
    "Weather",
    "Network",
    "Station",
]

__version__ = "1.0.0"

"""FastAPI server — JSON access to the booking scheduler.

Run with:
    uvicorn evdock.api.server:app --reload --port 8000

Or:
    evdock-api

Endpoints:
    GET  /health
    GET  /weather                                  — current weather
    PUT  /weather                                  — change weather (all stations)
    POST /stations/{sid}/users                     — register user
    POST /stations/{sid}/vehicles                  — register vehicle
    POST /stations/{sid}/vehicles/{vid}/discharge  — V2G discharge
    POST /stations/{sid}/bookings                  — request booking
    POST /stations/{sid}/bookings/{bid}/cancel     — cancel booking
    POST /stations/{sid}/bookings/{bid}/complete   — complete + invoice
    GET  /stations/{sid}/docks                     — dock status + power draw
    GET  /stations/{sid}/report                    — analytics report
    GET  /stations/{sid}/users/{uid}/bookings      — user's bookings
    GET  /stations/{sid}/sessions                  — live progress of active bookings

A ``Rejected`` result becomes an HTTP error whose ``detail`` carries the
rejection reason and message.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field, field_validator

from evdock.config.loader import load_network_config
from evdock.models.enums import MembershipLevel, RejectionReason, Weather
from evdock.models.results import (
    BookingConfirmation,
    BookingSnapshot,
    CancellationReceipt,
    DischargeResult,
    DockStatus,
    Invoice,
    LiveSession,
    PowerOverview,
    Rejected,
    StationReport,
    UserRecord,
    VehicleRecord,
)
from evdock.station import Network, Station
from evdock.utils.logging import configure_logging


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

def create_app(network: Optional[Network] = None) -> FastAPI:
    """Build an app bound to ``network`` (a fresh one from config by default)."""
    if network is None:
        config = load_network_config()
        configure_logging(config.logging)
        network = Network(config)

    api = FastAPI(
        title="EV Dock Booking Scheduler API",
        version="1.0",
        description="Register drivers and vehicles, book charging docks, settle sessions and read station analytics.",
    )
    api.state.network = network
    _register_routes(api)
    return api


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class WeatherRequest(BaseModel):
    condition: Union[Weather, int] = Field(description="Sunny / Cloudy / Night, or menu code 0 / 1 / 2")

    @field_validator("condition")
    @classmethod
    def _from_code(cls, value: Union[Weather, int]) -> Weather:
        return Weather.from_code(value) if isinstance(value, int) else value


class UserRequest(BaseModel):
    user_id: int
    name: str = Field(min_length=1)
    membership: int = Field(default=int(MembershipLevel.REGULAR), description="0 Regular, 1 Premium")


class VehicleRequest(BaseModel):
    vehicle_id: int
    user_id: int
    soc: float = Field(description="State of charge (%), clamped to 0..100")
    capacity_kwh: float
    supports_v2g: bool = False


class BookingRequest(BaseModel):
    user_id: int
    vehicle_id: int
    start_time: float = Field(description="Requested start hour, 0 ≤ t < 24")
    duration: float = Field(description="Hours, > 0")
    charging_type: int = Field(description="1 Slow, 2 Medium, 3 Fast, 4 Solar")
    power_rating_kw: Optional[float] = Field(
        default=None,
        description="Minimum dock power; defaults to the charging type's nominal power",
    )


class DischargeRequest(BaseModel):
    energy_kwh: float


class DockOverview(BaseModel):
    docks: list[DockStatus]
    power: PowerOverview


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

_STATUS_BY_REASON: dict[RejectionReason, int] = {
    RejectionReason.NOT_FOUND: 404,
    RejectionReason.DUPLICATE_IDENTITY: 409,
    RejectionReason.INVALID_STATE: 409,
    RejectionReason.CAPACITY_EXCEEDED: 409,
    RejectionReason.NO_AVAILABLE_RESOURCE: 409,
    RejectionReason.INVALID_REQUEST: 422,
}


def _unwrap(result: Union[Any, Rejected]) -> Any:
    """Return a success model, or raise the HTTP error for a rejection."""
    if isinstance(result, Rejected):
        raise HTTPException(
            status_code=_STATUS_BY_REASON[result.reason],
            detail={"reason": result.reason.value, "message": result.message},
        )
    return result


def _station(network: Network, station_id: int) -> Station:
    station = network.station(station_id)
    if station is None:
        raise HTTPException(
            status_code=404,
            detail={"reason": RejectionReason.NOT_FOUND.value, "message": f"Station {station_id} not found"},
        )
    return station


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

def _register_routes(api: FastAPI) -> None:
    network: Network = api.state.network

    @api.get("/health")
    def health_check():
        return {"status": "ok", "stations": len(network)}

    @api.get("/weather")
    def get_weather():
        return {"condition": network.weather.current}

    @api.put("/weather")
    def set_weather(req: WeatherRequest):
        return {"condition": network.set_weather(req.condition)}

    @api.post("/stations/{station_id}/users", response_model=UserRecord, status_code=201)
    def register_user(station_id: int, req: UserRequest):
        station = _station(network, station_id)
        return _unwrap(station.register_user(req.user_id, req.name, req.membership))

    @api.post("/stations/{station_id}/vehicles", response_model=VehicleRecord, status_code=201)
    def register_vehicle(station_id: int, req: VehicleRequest):
        station = _station(network, station_id)
        return _unwrap(station.register_vehicle(
            req.vehicle_id, req.user_id, req.soc, req.capacity_kwh, req.supports_v2g,
        ))

    @api.post("/stations/{station_id}/vehicles/{vehicle_id}/discharge", response_model=DischargeResult)
    def discharge(station_id: int, vehicle_id: int, req: DischargeRequest):
        station = _station(network, station_id)
        return _unwrap(station.discharge_to_grid(vehicle_id, req.energy_kwh))

    @api.post("/stations/{station_id}/bookings", response_model=BookingConfirmation, status_code=201)
    def request_booking(station_id: int, req: BookingRequest):
        station = _station(network, station_id)
        return _unwrap(station.request_booking(
            req.user_id, req.vehicle_id, req.start_time, req.duration,
            req.charging_type, req.power_rating_kw,
        ))

    @api.post("/stations/{station_id}/bookings/{booking_id}/cancel", response_model=CancellationReceipt)
    def cancel_booking(station_id: int, booking_id: int):
        station = _station(network, station_id)
        return _unwrap(station.cancel_booking(booking_id))

    @api.post("/stations/{station_id}/bookings/{booking_id}/complete", response_model=Invoice)
    def complete_booking(station_id: int, booking_id: int):
        station = _station(network, station_id)
        return _unwrap(station.complete_booking(booking_id))

    @api.get("/stations/{station_id}/docks", response_model=DockOverview)
    def dock_status(station_id: int):
        station = _station(network, station_id)
        return DockOverview(docks=station.get_dock_status(), power=station.power_overview())

    @api.get("/stations/{station_id}/report", response_model=StationReport)
    def report(station_id: int):
        return _station(network, station_id).generate_report()

    @api.get("/stations/{station_id}/users/{user_id}/bookings", response_model=list[BookingSnapshot])
    def user_bookings(station_id: int, user_id: int):
        return _station(network, station_id).get_user_bookings(user_id)

    @api.get("/stations/{station_id}/sessions", response_model=list[LiveSession])
    def sessions(
        station_id: int,
        current_time: Optional[float] = Query(
            default=None,
            description="Simulated clock hour; defaults to one hour after the station's first booking",
        ),
    ):
        return _station(network, station_id).live_sessions(current_time)


app = create_app()


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    uvicorn.run(
        "evdock.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()

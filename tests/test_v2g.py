"""Tests for vehicle-to-grid discharge."""

from __future__ import annotations

import math

import pytest

from evdock.engine.v2g import discharge_to_grid
from evdock.models.entities import Vehicle
from evdock.models.enums import RejectionReason
from evdock.models.results import DischargeResult
from evdock.station import Station


class TestDischargeToGrid:

    def test_partial_discharge(self):
        vehicle = Vehicle(vehicle_id=1, user_id=1, battery_soc=50.0, battery_capacity_kwh=40.0, supports_v2g=True)
        assert discharge_to_grid(vehicle, 5.0) == pytest.approx(5.0)
        assert vehicle.battery_soc == pytest.approx(37.5)

    def test_limited_by_stored_energy(self):
        vehicle = Vehicle(vehicle_id=1, user_id=1, battery_soc=50.0, battery_capacity_kwh=40.0, supports_v2g=True)
        assert discharge_to_grid(vehicle, 100.0) == pytest.approx(20.0)
        assert vehicle.battery_soc == pytest.approx(0.0)

    def test_non_v2g_vehicle(self):
        vehicle = Vehicle(vehicle_id=1, user_id=1, battery_soc=50.0, battery_capacity_kwh=40.0)
        assert discharge_to_grid(vehicle, 5.0) == 0.0
        assert vehicle.battery_soc == 50.0

    def test_zero_request(self):
        vehicle = Vehicle(vehicle_id=1, user_id=1, battery_soc=50.0, battery_capacity_kwh=40.0, supports_v2g=True)
        assert discharge_to_grid(vehicle, 0.0) == 0.0
        assert vehicle.battery_soc == 50.0


class TestStationDischarge:

    def test_result(self, station: Station):
        result = station.discharge_to_grid(20, 5.0)
        assert isinstance(result, DischargeResult)
        assert result.requested_kwh == 5.0
        assert result.discharged_kwh == pytest.approx(5.0)
        assert result.battery_soc == pytest.approx(37.5)
        assert station.lookup_vehicle(20).battery_soc == pytest.approx(37.5)

    def test_non_v2g_returns_zero(self, station: Station):
        result = station.discharge_to_grid(10, 5.0)
        assert result.discharged_kwh == 0.0
        assert result.battery_soc == 50.0

    def test_unknown_vehicle(self, station: Station):
        assert station.discharge_to_grid(99, 5.0).reason is RejectionReason.NOT_FOUND

    @pytest.mark.parametrize("energy", [-1.0, math.inf, math.nan])
    def test_invalid_energy(self, station: Station, energy: float):
        assert station.discharge_to_grid(20, energy).reason is RejectionReason.INVALID_REQUEST
        assert station.lookup_vehicle(20).battery_soc == 50.0

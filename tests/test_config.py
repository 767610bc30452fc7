"""Validation tests for the config models and the YAML loader."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from evdock.config import (
    CancellationPolicy,
    DockSpec,
    EnergyConfig,
    LoggingSettings,
    NetworkConfig,
    PeakPolicy,
    StationConfig,
    TariffConfig,
    load_network_config,
)
from evdock.models.enums import EnergySourceKind
from evdock.utils.logging import configure_logging

SCENARIO = Path(__file__).resolve().parents[1] / "scenarios" / "default_network.yaml"


class TestDefaults:

    def test_network(self):
        cfg = NetworkConfig()
        assert cfg.num_stations == 3
        assert cfg.station.max_users == 10
        assert cfg.station.max_vehicles == 10
        assert cfg.station.max_bookings == 20
        assert cfg.station.grid_capacity_kw == 150.0

    def test_dock_layout(self):
        docks = StationConfig().docks
        assert [(d.dock_id, d.power_rating_kw, d.source) for d in docks] == [
            (1, 7.0, EnergySourceKind.GRID),
            (2, 7.0, EnergySourceKind.SOLAR),
            (3, 22.0, EnergySourceKind.GRID),
            (4, 22.0, EnergySourceKind.SOLAR),
            (5, 50.0, EnergySourceKind.GRID),
        ]

    def test_tariff(self):
        tariff = TariffConfig()
        assert tariff.slow_rate_per_kwh == 0.2
        assert tariff.medium_rate_per_kwh == 0.3
        assert tariff.fast_rate_per_kwh == 0.4
        assert tariff.solar_rate_per_kwh == 0.15
        assert tariff.solar_discount == 0.85
        assert tariff.peak_surcharge == 1.2
        assert tariff.premium_discount == 0.85

    def test_policies(self):
        peak = PeakPolicy()
        assert (peak.peak_start, peak.peak_end, peak.critical_soc_pct) == (12.0, 18.0, 20.0)
        fees = CancellationPolicy()
        assert (fees.short_notice_hours, fees.short_notice_fee) == (1.0, 5.0)
        assert (fees.medium_notice_hours, fees.medium_notice_fee) == (4.0, 2.0)

    def test_energy(self):
        energy = EnergyConfig()
        assert energy.grid_rate_adjustment == 1.0
        assert energy.solar_rate_adjustment == 0.9
        assert energy.grid_co2_kg_per_kwh == 0.5
        assert energy.solar_co2_kg_per_kwh == 0.0


class TestValidation:

    def test_peak_window_order(self):
        with pytest.raises(ValidationError):
            PeakPolicy(peak_start=18.0, peak_end=12.0)
        with pytest.raises(ValidationError):
            PeakPolicy(peak_start=12.0, peak_end=12.0)

    def test_cancellation_bands_order(self):
        CancellationPolicy(short_notice_hours=2.0, medium_notice_hours=2.0)
        with pytest.raises(ValidationError):
            CancellationPolicy(short_notice_hours=5.0, medium_notice_hours=4.0)

    def test_dock_spec(self):
        with pytest.raises(ValidationError):
            DockSpec(dock_id=0, power_rating_kw=7.0)
        with pytest.raises(ValidationError):
            DockSpec(dock_id=1, power_rating_kw=0.0)
        with pytest.raises(ValidationError):
            DockSpec(dock_id=1, power_rating_kw=7.0, source="Wind")

    def test_duplicate_dock_ids(self):
        with pytest.raises(ValidationError):
            StationConfig(docks=[
                DockSpec(dock_id=1, power_rating_kw=7.0),
                DockSpec(dock_id=1, power_rating_kw=22.0),
            ])

    def test_empty_dock_list(self):
        with pytest.raises(ValidationError):
            StationConfig(docks=[])

    def test_capacity_limits(self):
        with pytest.raises(ValidationError):
            StationConfig(max_bookings=0)
        with pytest.raises(ValidationError):
            NetworkConfig(num_stations=0)

    def test_cloudy_factor_range(self):
        with pytest.raises(ValidationError):
            EnergyConfig(cloudy_solar_factor=1.5)


class TestLoader:

    def test_bundled_scenario_matches_defaults(self):
        assert load_network_config(SCENARIO) == NetworkConfig()

    def test_no_path_gives_defaults(self, monkeypatch):
        monkeypatch.delenv("EVDOCK_CONFIG_PATH", raising=False)
        assert load_network_config() == NetworkConfig()

    def test_partial_file(self, tmp_path):
        path = tmp_path / "small.yaml"
        path.write_text(
            "num_stations: 1\n"
            "station:\n"
            "  docks:\n"
            "    - {dock_id: 9, power_rating_kw: 11.0, source: Solar}\n"
            "peak:\n"
            "  peak_start: 16\n"
            "  peak_end: 20\n",
            encoding="utf-8",
        )
        cfg = load_network_config(path)
        assert cfg.num_stations == 1
        assert cfg.station.docks == [DockSpec(dock_id=9, power_rating_kw=11.0, source=EnergySourceKind.SOLAR)]
        assert cfg.peak.peak_end == 20.0
        assert cfg.tariff == TariffConfig()

    def test_env_var(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("num_stations: 2\n", encoding="utf-8")
        monkeypatch.setenv("EVDOCK_CONFIG_PATH", str(path))
        assert load_network_config().num_stations == 2

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_network_config(path) == NetworkConfig()

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_network_config(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("peak:\n  peak_start: 20\n  peak_end: 10\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_network_config(path)


class TestConfigureLogging:

    def test_rejects_unknown_level(self):
        with pytest.raises(ValueError):
            configure_logging(LoggingSettings(level="LOUD"))

    def test_defaults_when_no_settings(self):
        configure_logging()

    def test_creates_log_directory(self, tmp_path):
        log_file = tmp_path / "logs" / "evdock.log"
        configure_logging(LoggingSettings(level="debug", file=log_file))
        assert log_file.parent.is_dir()
        assert log_file.exists()

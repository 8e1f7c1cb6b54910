"""
Pytest configuration and fixtures for dryconomy testing.

This file sets up common fixtures, test configuration, and hooks for pytest.
"""

import pytest

from dryconomy.config.catalog import CityCatalog, TariffConfig
from dryconomy.config.models import CityParameters, TariffConstants
from dryconomy.economics.models import SimulationInput


def pytest_configure(config):
    """Configure pytest settings."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture(autouse=True)
def set_test_environment(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv('DRYCONOMY_ENV', 'test')
    monkeypatch.delenv('DRYCONOMY_CONFIG_DIR', raising=False)
    yield


@pytest.fixture
def sao_paulo():
    """São Paulo reference city (10x tower/drycooler baseline ratio)."""
    return CityParameters(
        id="sao-paulo",
        name="São Paulo",
        state="SP",
        module_capacity_kw=168.74,
        nominal_water_flow_l_per_min=24.2,
        evaporation_fan_logic_percent=0.16,
        tower_evaporation_percent=1.90,
        yearly_consumption_drycooler_liters=505000,
        yearly_consumption_tower_liters=5050000,
    )


@pytest.fixture
def tariffs():
    return TariffConstants(water_price_per_m3=10.5, sewage_tariff_percent=80.0)


@pytest.fixture
def catalog(sao_paulo):
    return CityCatalog([sao_paulo])


@pytest.fixture
def tariff_config(tariffs):
    return TariffConfig(tariffs)


@pytest.fixture
def full_time_input():
    return SimulationInput(capacity_kw=500, city_id="sao-paulo",
                           operating_hours_per_day=24, operating_days_per_week=7)


@pytest.fixture
def contact_form():
    return {
        "name": "  Maria Souza ",
        "email": " Maria.Souza@Example.COM ",
        "phone": "",
        "company": "Frigorífico Sul",
        "state": "SP",
    }

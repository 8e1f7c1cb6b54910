import json

import pytest

from dryconomy.core.constants import Calendar, WaterEquivalence
from dryconomy.core.enums import LeadStatus, ScheduleBasis, WebhookEvent
from dryconomy.core.exceptions import (
    CityNotFoundError,
    ConfigurationError,
    DryconomyError,
    InvalidInputError,
    PersistenceError,
)


def test_enum_string_values():
    """Test enums serialise as their plain string values."""
    assert ScheduleBasis.WEEKLY == "weekly"
    assert WebhookEvent.SIMULATION_CREATED.value == "simulation.created"
    assert WebhookEvent("lead.updated") is WebhookEvent.LEAD_UPDATED
    assert json.dumps({"status": LeadStatus.NEW}) == '{"status": "novo"}'


@pytest.mark.parametrize("value,expected", [
    ("novo", LeadStatus.NEW),
    ("em_atendimento", LeadStatus.CONTACTED),
    ("convertido", LeadStatus.CONVERTED),
    ("contacted", LeadStatus.CONTACTED),
    (" Qualified ", LeadStatus.QUALIFIED),
])
def test_lead_status_accepts_table_values_and_names(value, expected):
    assert LeadStatus(value) is expected


def test_lead_status_rejects_unknown():
    with pytest.raises(ValueError):
        LeadStatus("archived")


def test_calendar_is_consistent():
    assert Calendar.HOURS_PER_YEAR == Calendar.HOURS_PER_DAY * Calendar.DAYS_PER_YEAR
    assert WaterEquivalence.POOL_LITERS == 1000 * WaterEquivalence.SHOWER_LITERS


def test_invalid_input_error_names_field():
    error = InvalidInputError("capacity_kw", "must be greater than 0")
    assert error.field == "capacity_kw"
    assert error.message == "must be greater than 0"
    assert str(error) == "capacity_kw: must be greater than 0"


def test_city_not_found_is_invalid_input():
    error = CityNotFoundError("atlantis")
    assert isinstance(error, InvalidInputError)
    assert error.field == "city_id"
    assert error.city_id == "atlantis"
    assert "atlantis" in str(error)


@pytest.mark.parametrize("exc", [InvalidInputError("f", "m"), ConfigurationError("x"), PersistenceError("y")])
def test_hierarchy(exc):
    assert isinstance(exc, DryconomyError)

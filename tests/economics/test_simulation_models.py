import pytest

from dryconomy.core.enums import ScheduleBasis
from dryconomy.core.exceptions import InvalidInputError
from dryconomy.economics.models import SimulationInput


def test_defaults():
    inputs = SimulationInput(capacity_kw=500, city_id="sao-paulo")
    assert inputs.operating_hours_per_day == 24
    assert inputs.operating_days_per_week is None
    assert inputs.operating_days_per_year is None
    assert inputs.delta_t == 6.0
    assert inputs.schedule_basis == ScheduleBasis.WEEKLY


def test_from_request_accepts_wizard_keys():
    inputs = SimulationInput.from_request({
        "capacity": 750,
        "location": "Campinas",
        "operatingHours": 16,
        "deltaT": 5,
    })
    assert inputs.capacity_kw == 750
    assert inputs.city_id == "Campinas"
    assert inputs.operating_hours_per_day == 16
    assert inputs.delta_t == 5


def test_from_request_accepts_camel_case_api_keys():
    inputs = SimulationInput.from_request({
        "capacityKW": 500,
        "cityId": 42,
        "operatingHoursPerDay": 10,
        "operatingDaysPerWeek": 6,
    })
    assert inputs.city_id == "42"
    assert inputs.operating_days_per_week == 6
    assert inputs.schedule_basis == ScheduleBasis.WEEKLY


@pytest.mark.parametrize("days,field,expected_basis", [
    (365, "operating_days_per_year", ScheduleBasis.YEARLY),
    (250, "operating_days_per_year", ScheduleBasis.YEARLY),
    (5, "operating_days_per_week", ScheduleBasis.WEEKLY),
    (7, "operating_days_per_week", ScheduleBasis.WEEKLY),
])
def test_legacy_operating_days_key(days, field, expected_basis):
    inputs = SimulationInput.from_request({"capacity": 500, "location": "x", "operatingDays": days})
    assert getattr(inputs, field) == days
    assert inputs.schedule_basis == expected_basis


def test_explicit_key_wins_over_legacy_key():
    inputs = SimulationInput.from_request({
        "capacity": 500, "location": "x",
        "operatingDays": 365, "operating_days_per_year": 200,
    })
    assert inputs.operating_days_per_year == 200


def test_from_request_type_error_names_field():
    with pytest.raises(InvalidInputError) as excinfo:
        SimulationInput.from_request({"capacity": "lots", "location": "x"})
    assert "capacity" in excinfo.value.field


def test_from_request_missing_city():
    with pytest.raises(InvalidInputError) as excinfo:
        SimulationInput.from_request({"capacity": 500})
    assert "city" in excinfo.value.field or "location" in excinfo.value.field


def test_step_by_step_mutation():
    inputs = SimulationInput(capacity_kw=500, city_id="sao-paulo")
    inputs.operating_hours_per_day = 12
    inputs.operating_days_per_year = 300
    assert inputs.schedule_basis == ScheduleBasis.YEARLY
    with pytest.raises(ValueError):
        inputs.operating_hours_per_day = "twelve"


def test_result_to_dict_is_json_ready(sao_paulo, tariffs, full_time_input):
    from dryconomy.economics.calculator import SavingsCalculator
    import json

    data = SavingsCalculator().compute(full_time_input, sao_paulo, tariffs).to_dict()
    assert data["schedule_basis"] == "weekly"
    assert data["dry_cooler"]["modules"] == 3
    assert set(data["comparison"]) >= {"payback_years", "roi_percent", "total_lifetime_savings"}
    json.dumps(data)

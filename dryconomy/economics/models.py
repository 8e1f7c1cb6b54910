"""
Pydantic Models for Savings Simulation

Input and result records of the SavingsCalculator:
- SimulationInput: wizard/API input, mutated step by step until "finish"
- ConsumptionBreakdown / PeriodTotals: per-period figures
- DryCoolerResult, TowerResult, ComparisonResult: the two branches and their comparison
- SavingsBreakdown, WaterEquivalents: presentation extras derived from the comparison
- SimulationResult: complete, persisted output
"""

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator

from dryconomy.core.constants import Calendar
from dryconomy.core.enums import ScheduleBasis
from dryconomy.core.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


class SimulationInput(BaseModel):
    """
    Prospect's cooling-system parameters.

    Types are enforced on construction and assignment; ranges are checked by
    the calculator, which does not trust the caller.

    Days of operation are given EITHER per week (1..7) OR per year (1..365).
    When neither is supplied the system is assumed to run every day.
    """
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    capacity_kw: float = Field(
        ...,
        validation_alias=AliasChoices("capacity_kw", "capacityKW", "capacity"),
        description="Total thermal capacity to size (kW)",
    )
    city_id: str = Field(
        ...,
        validation_alias=AliasChoices("city_id", "cityId", "location"),
    )
    operating_hours_per_day: int = Field(
        24,
        validation_alias=AliasChoices("operating_hours_per_day", "operatingHoursPerDay", "operatingHours"),
    )
    operating_days_per_week: Optional[int] = Field(
        None,
        validation_alias=AliasChoices("operating_days_per_week", "operatingDaysPerWeek"),
    )
    operating_days_per_year: Optional[int] = Field(
        None,
        validation_alias=AliasChoices("operating_days_per_year", "operatingDaysPerYear"),
    )
    delta_t: float = Field(
        6.0,
        validation_alias=AliasChoices("delta_t", "deltaT"),
        description="Design temperature drop (°C); kept for city-table compatibility",
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_legacy_keys(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        # The wizard posted 'operatingDays' as days/year in one flow and
        # days/week in another; anything above a week can only be per year.
        if "operatingDays" in data:
            days = data.pop("operatingDays")
            if days not in (None, ""):
                try:
                    per_year = float(days) > Calendar.DAYS_PER_WEEK
                except (TypeError, ValueError):
                    per_year = False
                key = "operating_days_per_year" if per_year else "operating_days_per_week"
                data.setdefault(key, days)
        for key in ("city_id", "cityId", "location"):
            if isinstance(data.get(key), int):
                data[key] = str(data[key])
        return data

    @property
    def schedule_basis(self) -> ScheduleBasis:
        if self.operating_days_per_year is not None:
            return ScheduleBasis.YEARLY
        return ScheduleBasis.WEEKLY

    @classmethod
    def from_request(cls, payload: Mapping[str, Any]) -> "SimulationInput":
        """
        Build an input from an API body or wizard state.

        Raises:
            InvalidInputError: naming the first field that failed type validation
        """
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or "input"
            raise InvalidInputError(field, first.get("msg", "invalid value"))


class ConsumptionBreakdown(BaseModel):
    """Water consumption spread evenly over fixed calendar periods (litres)."""
    hourly: float = 0.0
    daily: float = 0.0
    monthly: float = 0.0
    yearly: float = 0.0


class DryCoolerResult(BaseModel):
    module_capacity_kw: float
    modules: int = Field(..., ge=1)
    total_capacity_kw: float
    nominal_water_flow: float = Field(0.0, description="L/min at sized capacity")
    evaporation_percent: float = 0.0
    evaporation_flow: float = Field(0.0, description="L/min")
    consumption: ConsumptionBreakdown = Field(default_factory=ConsumptionBreakdown)
    annual_cost: float = 0.0


class TowerResult(BaseModel):
    capacity_kw: float
    nominal_water_flow: float = 0.0
    evaporation_percent: float = 0.0
    evaporation_flow: float = 0.0
    consumption: ConsumptionBreakdown = Field(default_factory=ConsumptionBreakdown)
    annual_cost: float = 0.0


class ComparisonResult(BaseModel):
    """Water and financial comparison, tower minus DryCooler."""
    yearly_difference_liters: float = 0.0
    yearly_difference_percent: float = 0.0
    annual_savings_currency: float = 0.0
    implementation_cost: float = 0.0
    annual_maintenance_cost: float = 0.0
    net_annual_savings: float = 0.0
    payback_years: float = 0.0
    total_lifetime_savings: float = 0.0
    roi_percent: float = 0.0


class PeriodTotals(BaseModel):
    daily: float = 0.0
    monthly: float = 0.0
    yearly: float = 0.0


class SavingsBreakdown(BaseModel):
    water: PeriodTotals = Field(default_factory=PeriodTotals, description="Litres saved")
    cost: PeriodTotals = Field(default_factory=PeriodTotals, description="Currency saved")
    co2: PeriodTotals = Field(default_factory=PeriodTotals, description="kg CO2 avoided")


class WaterEquivalents(BaseModel):
    showers: int = 0
    pools: float = 0.0
    bottles: int = 0


class SimulationResult(BaseModel):
    """Complete output of one calculation."""
    dry_cooler: DryCoolerResult
    tower: TowerResult
    comparison: ComparisonResult
    savings: SavingsBreakdown = Field(default_factory=SavingsBreakdown)
    equivalents: WaterEquivalents = Field(default_factory=WaterEquivalents)
    operating_factor: float = 1.0
    schedule_basis: ScheduleBasis = ScheduleBasis.WEEKLY

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation for storage and webhooks."""
        return self.model_dump(mode="json")

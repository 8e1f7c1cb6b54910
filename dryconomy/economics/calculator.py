"""
DryCooler vs. Cooling Tower Savings Calculator.

Sizes a DryCooler installation for the requested capacity, projects the
water consumption of both technologies under the customer's operating
schedule and derives the financial comparison.

Calculation flow:
    1. Validate input (InvalidInputError, never clamped).
    2. Capacity sizing: modules = ceil(capacity / module capacity).
    3. Operating factor from hours/day and days/week (or days/year).
    4. Per-branch consumption: yearly = baseline * capacity ratio * factor,
       then spread over fixed calendar divisors.
    5. Per-branch annual water cost including sewage surcharge.
    6. Comparison and financial projection (payback, lifetime savings, ROI).

All computed fields pass through safe_number, so missing or zero city data
yields zeros rather than NaN/Infinity.
"""

import logging
import math
from typing import Optional

from dryconomy.config.catalog import CityCatalog, TariffConfig
from dryconomy.config.models import CityParameters, TariffConstants
from dryconomy.core.constants import Calendar, PAYBACK_SENTINEL_LIFETIMES, Units, WaterEquivalence
from dryconomy.core.exceptions import CityNotFoundError, InvalidInputError
from dryconomy.economics.models import (
    ComparisonResult,
    ConsumptionBreakdown,
    DryCoolerResult,
    PeriodTotals,
    SavingsBreakdown,
    SimulationInput,
    SimulationResult,
    TowerResult,
    WaterEquivalents,
)
from dryconomy.utils.numeric import is_finite_number, safe_number

logger = logging.getLogger(__name__)


def operating_factor(
    hours_per_day: int,
    days_per_week: Optional[int] = None,
    days_per_year: Optional[int] = None,
) -> float:
    """
    Fraction of full-time (24 h x 7 d) operation.

    Exactly one day basis is used; passing both is an error. With no day
    basis the system runs every day.

    Raises:
        InvalidInputError: on out-of-range values or mixed bases
    """
    if days_per_week is not None and days_per_year is not None:
        raise InvalidInputError(
            "operating_days", "give days per week or days per year, not both"
        )
    _check_int_range("operating_hours_per_day", hours_per_day, 1, Calendar.HOURS_PER_DAY)

    hours_share = hours_per_day / Calendar.HOURS_PER_DAY
    if days_per_year is not None:
        _check_int_range("operating_days_per_year", days_per_year, 1, Calendar.DAYS_PER_YEAR)
        return hours_share * days_per_year / Calendar.DAYS_PER_YEAR

    if days_per_week is None:
        days_per_week = Calendar.DAYS_PER_WEEK
    _check_int_range("operating_days_per_week", days_per_week, 1, Calendar.DAYS_PER_WEEK)
    return hours_share * days_per_week / Calendar.DAYS_PER_WEEK


def _check_int_range(field: str, value, low: int, high: int) -> None:
    if not is_finite_number(value) or value != int(value):
        raise InvalidInputError(field, f"must be a whole number, got {value!r}")
    if not low <= value <= high:
        raise InvalidInputError(field, f"must be between {low} and {high}, got {value}")


def spread_yearly(yearly: float) -> ConsumptionBreakdown:
    """Annual figure spread evenly over fixed calendar periods."""
    yearly = safe_number(yearly)
    return ConsumptionBreakdown(
        hourly=safe_number(yearly / Calendar.HOURS_PER_YEAR),
        daily=safe_number(yearly / Calendar.DAYS_PER_YEAR),
        monthly=safe_number(yearly / Calendar.MONTHS_PER_YEAR),
        yearly=yearly,
    )


def annual_water_cost(yearly_liters: float, tariffs: TariffConstants) -> float:
    """Water bill for a yearly volume: litres -> m³, price, sewage surcharge."""
    m3 = yearly_liters / Units.LITERS_PER_M3
    return safe_number(m3 * tariffs.water_price_per_m3 * tariffs.sewage_multiplier)


class SavingsCalculator:
    """
    Stateless DryCooler/tower comparison.

    A single instance may be shared across threads and requests; compute()
    keeps no state between calls.

    Example:
        calc = SavingsCalculator()
        result = calc.compute(inputs, catalog.get_by_id("sao-paulo"), tariffs)
        print(result.dry_cooler.modules, result.comparison.payback_years)
    """

    def simulate(
        self,
        inputs: SimulationInput,
        catalog: CityCatalog,
        tariff_config: TariffConfig,
    ) -> SimulationResult:
        """
        Resolve reference data for the input and compute.

        Raises:
            CityNotFoundError: if inputs.city_id matches no catalog id or name
            InvalidInputError: on any other validation failure
        """
        city = catalog.resolve(inputs.city_id)
        if city is None:
            raise CityNotFoundError(inputs.city_id)
        return self.compute(inputs, city, tariff_config.get_current())

    def compute(
        self,
        inputs: SimulationInput,
        city: Optional[CityParameters],
        tariffs: Optional[TariffConstants],
    ) -> SimulationResult:
        """
        Run the full comparison for one input.

        Args:
            inputs: Customer parameters.
            city: Parameters of the selected city.
            tariffs: Current cost constants.

        Returns:
            SimulationResult: structurally complete result.

        Raises:
            InvalidInputError: naming the offending field.
        """
        self._validate(inputs, city, tariffs)

        factor = operating_factor(
            inputs.operating_hours_per_day,
            inputs.operating_days_per_week,
            inputs.operating_days_per_year,
        )

        # 1. Capacity sizing: partial modules are not sold
        capacity_ratio = inputs.capacity_kw / city.module_capacity_kw
        if not math.isfinite(capacity_ratio):
            raise InvalidInputError("capacity_kw", "capacity out of range for the city's module size")
        modules = max(math.ceil(capacity_ratio), 1)
        total_capacity = safe_number(modules * city.module_capacity_kw)

        # 2. DryCooler branch
        dc_nominal = safe_number(city.nominal_water_flow_l_per_min * capacity_ratio)
        dc_yearly = safe_number(city.yearly_consumption_drycooler_liters * capacity_ratio * factor)
        dry_cooler = DryCoolerResult(
            module_capacity_kw=city.module_capacity_kw,
            modules=modules,
            total_capacity_kw=total_capacity,
            nominal_water_flow=dc_nominal,
            evaporation_percent=safe_number(city.evaporation_fan_logic_percent),
            evaporation_flow=safe_number(dc_nominal * city.evaporation_fan_logic_percent / 100.0),
            consumption=spread_yearly(dc_yearly),
            annual_cost=annual_water_cost(dc_yearly, tariffs),
        )

        # 3. Tower branch
        tw_nominal = safe_number(city.nominal_water_flow_l_per_min * capacity_ratio)
        tw_yearly = safe_number(city.yearly_consumption_tower_liters * capacity_ratio * factor)
        tower = TowerResult(
            capacity_kw=inputs.capacity_kw,
            nominal_water_flow=tw_nominal,
            evaporation_percent=safe_number(city.tower_evaporation_percent),
            evaporation_flow=safe_number(tw_nominal * city.tower_evaporation_percent / 100.0),
            consumption=spread_yearly(tw_yearly),
            annual_cost=annual_water_cost(tw_yearly, tariffs),
        )

        comparison = self._compare(dry_cooler, tower, tariffs)

        logger.debug(
            f"Computed {inputs.capacity_kw} kW in '{city.id}': {modules} modules, "
            f"factor {factor:.4f}, saving {comparison.yearly_difference_liters:,.0f} L/year"
        )

        return SimulationResult(
            dry_cooler=dry_cooler,
            tower=tower,
            comparison=comparison,
            savings=self._savings(dry_cooler, tower, tariffs),
            equivalents=self._equivalents(comparison.yearly_difference_liters),
            operating_factor=safe_number(factor),
            schedule_basis=inputs.schedule_basis,
        )

    def _validate(
        self,
        inputs: SimulationInput,
        city: Optional[CityParameters],
        tariffs: Optional[TariffConstants],
    ) -> None:
        if inputs is None:
            raise InvalidInputError("input", "simulation input is required")
        if not is_finite_number(inputs.capacity_kw) or inputs.capacity_kw <= 0:
            raise InvalidInputError(
                "capacity_kw", f"must be a finite number greater than 0, got {inputs.capacity_kw!r}"
            )
        if city is None:
            raise InvalidInputError("city_id", f"no parameters for city '{inputs.city_id}'")
        if not is_finite_number(city.module_capacity_kw) or city.module_capacity_kw <= 0:
            raise InvalidInputError(
                "module_capacity_kw",
                f"city '{city.id}' has invalid module capacity {city.module_capacity_kw!r}",
            )
        if tariffs is None:
            raise InvalidInputError("tariffs", "tariff constants are required")

    def _compare(
        self,
        dry_cooler: DryCoolerResult,
        tower: TowerResult,
        tariffs: TariffConstants,
    ) -> ComparisonResult:
        tower_yearly = tower.consumption.yearly
        difference = safe_number(tower_yearly - dry_cooler.consumption.yearly)
        percent = safe_number(difference / tower_yearly * 100.0) if tower_yearly != 0 else 0.0

        billable_modules = max(dry_cooler.modules, 1)
        annual_savings = safe_number(tower.annual_cost - dry_cooler.annual_cost)
        implementation = safe_number(tariffs.install_base_cost * billable_modules)
        maintenance = safe_number(tariffs.maintenance_annual_cost_base * billable_modules)
        net_savings = safe_number(annual_savings - maintenance)

        if net_savings > 0:
            payback = safe_number(implementation / net_savings)
        else:
            payback = safe_number(tariffs.equipment_lifetime_years * PAYBACK_SENTINEL_LIFETIMES)

        lifetime_savings = safe_number(net_savings * tariffs.equipment_lifetime_years)
        roi = safe_number(lifetime_savings / implementation * 100.0) if implementation > 0 else 0.0

        return ComparisonResult(
            yearly_difference_liters=difference,
            yearly_difference_percent=percent,
            annual_savings_currency=annual_savings,
            implementation_cost=implementation,
            annual_maintenance_cost=maintenance,
            net_annual_savings=net_savings,
            payback_years=payback,
            total_lifetime_savings=lifetime_savings,
            roi_percent=roi,
        )

    def _savings(
        self,
        dry_cooler: DryCoolerResult,
        tower: TowerResult,
        tariffs: TariffConstants,
    ) -> SavingsBreakdown:
        dc, tw = dry_cooler.consumption, tower.consumption
        water = PeriodTotals(
            daily=safe_number(tw.daily - dc.daily),
            monthly=safe_number(tw.monthly - dc.monthly),
            yearly=safe_number(tw.yearly - dc.yearly),
        )
        price_per_liter = tariffs.water_price_per_m3 * tariffs.sewage_multiplier / Units.LITERS_PER_M3
        cost = PeriodTotals(**{
            period: safe_number(liters * price_per_liter)
            for period, liters in water.model_dump().items()
        })
        co2 = PeriodTotals(**{
            period: safe_number(liters * tariffs.co2_kg_per_liter)
            for period, liters in water.model_dump().items()
        })
        return SavingsBreakdown(water=water, cost=cost, co2=co2)

    def _equivalents(self, yearly_liters: float) -> WaterEquivalents:
        liters = max(safe_number(yearly_liters), 0.0)
        return WaterEquivalents(
            showers=int(round(liters / WaterEquivalence.SHOWER_LITERS)),
            pools=round(liters / WaterEquivalence.POOL_LITERS, 1),
            bottles=int(round(liters / WaterEquivalence.BOTTLE_LITERS)),
        )

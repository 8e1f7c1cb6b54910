"""
Pydantic Models for Reference Data

Typed records for the two lookup tables the calculator consumes:
- CityParameters: per-city engineering and climate constants
- TariffConstants: global cost/tariff constants, resolved once at load time
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class CityParameters(BaseModel):
    """
    Engineering constants for one city.

    Field aliases accept the column names used by the admin city table
    (capacity, water_flow, makeup_water_fan_logic, water_consumption_year,
    water_consumption_year_conventional) so stored rows load unchanged.

    module_capacity_kw is not constrained here; the calculator rejects
    non-positive values per request.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Stable city identifier (slug or database id)")
    name: str = Field(..., description="Display name")
    state: Optional[str] = Field(None, description="State/province")
    country: str = Field("Brasil", description="Country")

    module_capacity_kw: float = Field(
        ...,
        validation_alias=AliasChoices("module_capacity_kw", "capacity"),
        description="Thermal capacity of one DryCooler module (kW)",
    )
    nominal_water_flow_l_per_min: float = Field(
        0.0,
        validation_alias=AliasChoices("nominal_water_flow_l_per_min", "water_flow"),
        description="Nominal water flow of one module (L/min)",
    )
    evaporation_fan_logic_percent: float = Field(
        0.0,
        validation_alias=AliasChoices("evaporation_fan_logic_percent", "makeup_water_fan_logic"),
        description="DryCooler make-up water share under fan logic (%)",
    )
    tower_evaporation_percent: float = Field(
        1.90,
        validation_alias=AliasChoices("tower_evaporation_percent", "water_consumption_fan_logic"),
        description="Cooling tower evaporation share of nominal flow (%)",
    )
    yearly_consumption_drycooler_liters: float = Field(
        0.0,
        validation_alias=AliasChoices("yearly_consumption_drycooler_liters", "water_consumption_year"),
        description="Yearly DryCooler consumption per module-capacity unit at full-time operation (L/year)",
    )
    yearly_consumption_tower_liters: float = Field(
        0.0,
        validation_alias=AliasChoices("yearly_consumption_tower_liters", "water_consumption_year_conventional"),
        description="Yearly cooling tower consumption per module-capacity unit at full-time operation (L/year)",
    )
    average_temperature_c: Optional[float] = Field(
        None,
        validation_alias=AliasChoices("average_temperature_c", "average_temperature"),
    )
    inlet_temperature_c: float = Field(41.0, validation_alias=AliasChoices("inlet_temperature_c", "tin"))
    outlet_temperature_c: float = Field(35.0, validation_alias=AliasChoices("outlet_temperature_c", "tout"))

    @property
    def delta_t(self) -> float:
        """Design temperature drop across the cooler (°C)."""
        return self.inlet_temperature_c - self.outlet_temperature_c


# Admin variable names (as stored in the calculation variables table) -> field
TARIFF_VARIABLE_NAMES: Dict[str, str] = {
    "preco_m3_agua": "water_price_per_m3",
    "tarifa_esgoto_percentual": "sewage_tariff_percent",
    "economia_media_technologia": "technology_efficiency_percent",
    "vida_util_equipamento": "equipment_lifetime_years",
    "custo_implantacao_base": "install_base_cost",
    "custo_manutencao_anual": "maintenance_annual_cost_base",
    "taxa_inflacao_anual": "inflation_rate_annual",
    "taxa_juros_anual": "interest_rate_annual",
    "fator_co2_litro": "co2_kg_per_liter",
}


class TariffConstants(BaseModel):
    """Global cost constants shared by every calculation."""
    model_config = ConfigDict(frozen=True)

    water_price_per_m3: float = Field(10.50, ge=0, description="Water price (currency/m³)")
    sewage_tariff_percent: float = Field(80.0, ge=0, description="Sewage surcharge on water price (%)")
    technology_efficiency_percent: float = Field(37.0, description="Average DryCooler saving claimed (%)")
    equipment_lifetime_years: float = Field(10.0, ge=0, description="Rated equipment life (years)")
    install_base_cost: float = Field(5000.0, ge=0, description="Installation cost per module")
    maintenance_annual_cost_base: float = Field(200.0, ge=0, description="Yearly maintenance per module")
    inflation_rate_annual: float = Field(3.5, description="Annual inflation (%)")
    interest_rate_annual: float = Field(6.0, description="Annual interest rate (%)")
    co2_kg_per_liter: float = Field(0.00058, ge=0, description="CO2 emitted per litre of treated water (kg)")

    @property
    def sewage_multiplier(self) -> float:
        return 1.0 + self.sewage_tariff_percent / 100.0

    @classmethod
    def from_variables(cls, rows: Iterable[Mapping[str, Any]]) -> "TariffConstants":
        """
        Resolve admin calculation-variable rows into a typed record.

        Each row is a mapping with at least 'name' and 'value'. Names may be
        the stored Portuguese variable names or the field names themselves.
        Missing variables keep their defaults; unknown ones are ignored.
        """
        values: Dict[str, Any] = {}
        for row in rows:
            name = str(row.get("name", "")).strip()
            field_name = TARIFF_VARIABLE_NAMES.get(name, name)
            if field_name not in cls.model_fields:
                logger.debug(f"Ignoring unknown calculation variable '{name}'")
                continue
            values[field_name] = row.get("value")

        missing = set(cls.model_fields) - set(values)
        if missing:
            logger.info(f"Using default tariff values for: {', '.join(sorted(missing))}")
        return cls(**values)

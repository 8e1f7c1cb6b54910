"""
Dryconomy Economics Package

Water and cost comparison between a DryCooler installation and a
conventional cooling tower:
- Type-safe Pydantic models for inputs and results
- Stateless SavingsCalculator (sizing, consumption, payback, ROI)
"""

from dryconomy.economics.calculator import (
    SavingsCalculator,
    operating_factor,
    spread_yearly,
    annual_water_cost,
)
from dryconomy.economics.models import (
    SimulationInput,
    SimulationResult,
    ConsumptionBreakdown,
    DryCoolerResult,
    TowerResult,
    ComparisonResult,
    PeriodTotals,
    SavingsBreakdown,
    WaterEquivalents,
)

__all__ = [
    "SavingsCalculator",
    "operating_factor",
    "spread_yearly",
    "annual_water_cost",
    "SimulationInput",
    "SimulationResult",
    "ConsumptionBreakdown",
    "DryCoolerResult",
    "TowerResult",
    "ComparisonResult",
    "PeriodTotals",
    "SavingsBreakdown",
    "WaterEquivalents",
]

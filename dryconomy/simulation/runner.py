"""
Command-line savings simulation.

Entry Points:
    - `run_simulation()`: compute one comparison from plain arguments.
    - `main()`: CLI entry point (`dryconomy-simulate`).

Workflow:
    1. Load city catalog and tariff constants (packaged defaults or files).
    2. Resolve the city by id or name.
    3. Compute and print/write the JSON result.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dryconomy.config.catalog import CityCatalog, TariffConfig
from dryconomy.core.exceptions import ConfigurationError, InvalidInputError
from dryconomy.economics.calculator import SavingsCalculator
from dryconomy.economics.models import SimulationInput

logger = logging.getLogger(__name__)


def run_simulation(
    capacity_kw: float,
    city: str,
    hours_per_day: int = 24,
    days_per_week: Optional[int] = None,
    days_per_year: Optional[int] = None,
    catalog: Optional[CityCatalog] = None,
    tariff_config: Optional[TariffConfig] = None,
) -> Dict[str, Any]:
    """
    Compute one comparison and return it as a JSON-ready dict.

    Args:
        capacity_kw: Required thermal capacity (kW).
        city: City id or display name.
        hours_per_day: Operating hours per day (1-24).
        days_per_week: Operating days per week (1-7).
        days_per_year: Operating days per year (1-365), instead of days_per_week.
        catalog: City catalog (packaged default if None).
        tariff_config: Tariff constants (packaged default if None).

    Raises:
        InvalidInputError: on invalid input or unknown city
        ConfigurationError: if reference data cannot be loaded
    """
    catalog = catalog or CityCatalog.default()
    tariff_config = tariff_config or TariffConfig.default()

    inputs = SimulationInput.from_request({
        "capacity_kw": capacity_kw,
        "city_id": city,
        "operating_hours_per_day": hours_per_day,
        "operating_days_per_week": days_per_week,
        "operating_days_per_year": days_per_year,
    })
    logger.info(f"Simulating {capacity_kw} kW in '{city}'")
    result = SavingsCalculator().simulate(inputs, catalog, tariff_config)
    return result.to_dict()


def main(argv=None) -> int:
    """
    CLI entry point.

    Usage:
        dryconomy-simulate --capacity 500 --city sao-paulo --hours 12 --days-per-week 5
        dryconomy-simulate --list-cities
    """
    parser = argparse.ArgumentParser(description="Compare DryCooler and cooling tower water use.")
    parser.add_argument("--capacity", type=float, help="Required thermal capacity in kW.")
    parser.add_argument("--city", type=str, help="City id or name.")
    parser.add_argument("--hours", type=int, default=24, help="Operating hours per day (1-24).")
    days = parser.add_mutually_exclusive_group()
    days.add_argument("--days-per-week", type=int, default=None, help="Operating days per week (1-7).")
    days.add_argument("--days-per-year", type=int, default=None, help="Operating days per year (1-365).")
    parser.add_argument("--cities", type=str, default=None, help="City catalog YAML/JSON file.")
    parser.add_argument("--tariffs", type=str, default=None, help="Calculation variables YAML/JSON file.")
    parser.add_argument("--output", type=str, default=None, help="Write the JSON result to this file.")
    parser.add_argument("--list-cities", action="store_true", help="List available cities and exit.")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        catalog = CityCatalog.from_file(args.cities) if args.cities else CityCatalog.default()
        if args.list_cities:
            for city in catalog.list():
                print(f"{city.id}\t{city.name}\t{city.module_capacity_kw} kW")
            return 0

        if args.capacity is None or not args.city:
            parser.error("--capacity and --city are required")

        tariff_config = TariffConfig.from_file(args.tariffs) if args.tariffs else TariffConfig.default()
        result = run_simulation(
            capacity_kw=args.capacity,
            city=args.city,
            hours_per_day=args.hours,
            days_per_week=args.days_per_week,
            days_per_year=args.days_per_year,
            catalog=catalog,
            tariff_config=tariff_config,
        )
    except (InvalidInputError, ConfigurationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    text = json.dumps(result, indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(text, encoding='utf-8')
        logger.info(f"Result written to {args.output}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())

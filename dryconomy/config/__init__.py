"""
Reference data configuration: typed city and tariff records, file loaders
and the in-memory catalog providers.
"""

from dryconomy.config.models import CityParameters, TariffConstants, TARIFF_VARIABLE_NAMES
from dryconomy.config.loaders import ConfigLoader, load_cities, load_tariffs, default_config_dir
from dryconomy.config.catalog import CityCatalog, TariffConfig

__all__ = [
    'CityParameters',
    'TariffConstants',
    'TARIFF_VARIABLE_NAMES',
    'ConfigLoader',
    'load_cities',
    'load_tariffs',
    'default_config_dir',
    'CityCatalog',
    'TariffConfig',
]

"""
In-memory reference data providers.

CityCatalog and TariffConfig are handed to the calculator's callers
explicitly; nothing in the package keeps a module-level instance.
"""

import logging
import unicodedata
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from dryconomy.config.loaders import ConfigLoader, default_config_dir
from dryconomy.config.models import CityParameters, TariffConstants
from dryconomy.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _normalize_name(name: str) -> str:
    """Case- and accent-insensitive key ('São Paulo' -> 'sao paulo')."""
    decomposed = unicodedata.normalize("NFKD", name.strip().casefold())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


class CityCatalog:
    """
    Lookup of CityParameters by identifier or name.

    Example:
        catalog = CityCatalog.default()
        city = catalog.get_by_id("sao-paulo")
    """

    def __init__(self, cities: Iterable[CityParameters] = ()):
        self._cities: Dict[str, CityParameters] = {}
        for city in cities:
            self.upsert(city)

    @classmethod
    def from_file(cls, path: Path | str, loader: Optional[ConfigLoader] = None) -> "CityCatalog":
        loader = loader or ConfigLoader()
        return cls(loader.load_cities(path))

    @classmethod
    def default(cls) -> "CityCatalog":
        """Catalog built from the packaged (or DRYCONOMY_CONFIG_DIR) cities.yaml."""
        return cls.from_file(default_config_dir() / "cities.yaml")

    def __len__(self) -> int:
        return len(self._cities)

    def __contains__(self, city_id) -> bool:
        return str(city_id) in self._cities

    def get_by_id(self, city_id) -> Optional[CityParameters]:
        if city_id is None:
            return None
        return self._cities.get(str(city_id))

    def get_by_name(self, name: str) -> Optional[CityParameters]:
        if not name:
            return None
        key = _normalize_name(name)
        for city in self._cities.values():
            if _normalize_name(city.name) == key:
                return city
        return None

    def resolve(self, identifier) -> Optional[CityParameters]:
        """Look up by id first, then by display name."""
        city = self.get_by_id(identifier)
        if city is None and isinstance(identifier, str):
            city = self.get_by_name(identifier)
        return city

    def list(self) -> List[CityParameters]:
        """All cities sorted by display name."""
        return sorted(self._cities.values(), key=lambda c: _normalize_name(c.name))

    def upsert(self, city: CityParameters) -> None:
        if city.id in self._cities:
            logger.debug(f"Replacing city '{city.id}'")
        self._cities[city.id] = city

    def remove(self, city_id) -> bool:
        removed = self._cities.pop(str(city_id), None)
        if removed is not None:
            logger.info(f"Removed city '{city_id}' from catalog")
        return removed is not None


class TariffConfig:
    """Holder of the current TariffConstants."""

    def __init__(self, tariffs: Optional[TariffConstants] = None):
        self._current = tariffs or TariffConstants()

    @classmethod
    def from_file(cls, path: Path | str, loader: Optional[ConfigLoader] = None) -> "TariffConfig":
        loader = loader or ConfigLoader()
        return cls(loader.load_tariffs(path))

    @classmethod
    def default(cls) -> "TariffConfig":
        return cls.from_file(default_config_dir() / "tariffs.yaml")

    def get_current(self) -> TariffConstants:
        return self._current

    def update(self, **changes) -> TariffConstants:
        """
        Replace selected constants, returning the new record.

        Raises:
            ConfigurationError: If a name is not a known constant
            pydantic.ValidationError: If a value violates field constraints
        """
        unknown = set(changes) - set(TariffConstants.model_fields)
        if unknown:
            raise ConfigurationError(f"Unknown tariff constants: {', '.join(sorted(unknown))}")
        self._current = TariffConstants(**{**self._current.model_dump(), **changes})
        logger.info(f"Tariff constants updated: {', '.join(sorted(changes))}")
        return self._current

"""
Configuration loading with validation.

Supports YAML and JSON formats with JSON Schema validation. Both the city
catalog and the calculation variables go through the same pipeline:
parse -> schema check -> pydantic models.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
import yaml
from pydantic import ValidationError

from dryconomy.config.models import CityParameters, TariffConstants
from dryconomy.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).parent / "schemas"
DEFAULT_DATA_DIR = Path(__file__).parent / "data"

CONFIG_DIR_ENV = "DRYCONOMY_CONFIG_DIR"


def default_config_dir() -> Path:
    """Directory holding cities.yaml / tariffs.yaml, overridable by environment."""
    override = os.getenv(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return DEFAULT_DATA_DIR


class ConfigLoader:
    """
    Configuration loader with schema validation.

    Example:
        loader = ConfigLoader()
        cities = loader.load_cities("config/cities.yaml")
        tariffs = loader.load_tariffs("config/tariffs.yaml")
    """

    def __init__(self, schema_dir: Path = None):
        """
        Initialize configuration loader.

        Args:
            schema_dir: Directory with JSON schema files (uses packaged schemas if None)
        """
        self.schema_dir = Path(schema_dir) if schema_dir is not None else SCHEMA_DIR
        self.city_schema = self._load_schema("cities_schema_v1.json")
        self.tariff_schema = self._load_schema("tariffs_schema_v1.json")

    def _load_schema(self, filename: str) -> Dict[str, Any]:
        """Load JSON schema from file."""
        path = self.schema_dir / filename
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not load schema from {path}: {e}")
            return {}

    def read_file(self, config_path: Path | str) -> Dict[str, Any]:
        """
        Parse a YAML or JSON file into a dictionary.

        Raises:
            ConfigurationError: If file not found or cannot be parsed
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if config_path.suffix.lower() == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Failed to parse JSON: {e}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")
        return data

    def _validate(self, data: Dict[str, Any], schema: Dict[str, Any], what: str) -> None:
        if not schema:
            return
        try:
            jsonschema.validate(instance=data, schema=schema)
            logger.debug(f"JSON schema validation passed for {what}")
        except jsonschema.ValidationError as e:
            raise ConfigurationError(f"Schema validation failed for {what}: {e.message}")

    def cities_from_dict(self, data: Dict[str, Any]) -> List[CityParameters]:
        """Build validated CityParameters from an already-parsed document."""
        self._validate(data, self.city_schema, "cities")

        cities = []
        for row in data.get("cities", []):
            row = dict(row)
            # Database ids arrive as integers
            if row.get("id") is not None:
                row["id"] = str(row["id"])
            try:
                cities.append(CityParameters.model_validate(row))
            except ValidationError as e:
                raise ConfigurationError(f"Invalid city '{row.get('name')}': {e}")

        ids = [c.id for c in cities]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate city ids: {', '.join(duplicates)}")
        return cities

    def tariffs_from_dict(self, data: Dict[str, Any]) -> TariffConstants:
        """Build TariffConstants from an already-parsed document."""
        self._validate(data, self.tariff_schema, "tariffs")
        try:
            return TariffConstants.from_variables(data.get("variables", []))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid calculation variables: {e}")

    def load_cities(self, config_path: Path | str) -> List[CityParameters]:
        """
        Load the city catalog from YAML/JSON.

        Returns:
            List of CityParameters in file order

        Raises:
            ConfigurationError: If file not found or validation fails
        """
        cities = self.cities_from_dict(self.read_file(config_path))
        logger.info(f"Loaded {len(cities)} cities from {config_path}")
        return cities

    def load_tariffs(self, config_path: Path | str) -> TariffConstants:
        """
        Load calculation variables from YAML/JSON.

        Raises:
            ConfigurationError: If file not found or validation fails
        """
        tariffs = self.tariffs_from_dict(self.read_file(config_path))
        logger.info(f"Loaded tariff constants from {config_path}")
        return tariffs


def load_cities(config_path: Optional[Path | str] = None) -> List[CityParameters]:
    """Convenience wrapper: load cities from path or the default config dir."""
    path = config_path or default_config_dir() / "cities.yaml"
    return ConfigLoader().load_cities(path)


def load_tariffs(config_path: Optional[Path | str] = None) -> TariffConstants:
    """Convenience wrapper: load tariffs from path or the default config dir."""
    path = config_path or default_config_dir() / "tariffs.yaml"
    return ConfigLoader().load_tariffs(path)

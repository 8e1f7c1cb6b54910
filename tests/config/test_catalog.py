import unittest

import pytest
from pydantic import ValidationError

from dryconomy.config.catalog import CityCatalog, TariffConfig
from dryconomy.config.models import CityParameters, TariffConstants
from dryconomy.core.exceptions import ConfigurationError


class TestCityCatalog(unittest.TestCase):

    def setUp(self):
        self.catalog = CityCatalog.default()

    def test_get_by_id(self):
        city = self.catalog.get_by_id("sao-paulo")
        self.assertIsNotNone(city)
        self.assertEqual(city.name, "São Paulo")
        self.assertIn("sao-paulo", self.catalog)

    def test_unknown_id_returns_none(self):
        self.assertIsNone(self.catalog.get_by_id("atlantis"))
        self.assertIsNone(self.catalog.get_by_id(None))

    def test_name_lookup_ignores_case_and_accents(self):
        for name in ("São Paulo", "sao paulo", "SAO PAULO", "  São paulo "):
            with self.subTest(name=name):
                self.assertEqual(self.catalog.get_by_name(name).id, "sao-paulo")
        self.assertEqual(self.catalog.get_by_name("florianopolis").id, "florianopolis")

    def test_resolve_prefers_id(self):
        self.assertEqual(self.catalog.resolve("manaus").name, "Manaus")
        self.assertEqual(self.catalog.resolve("Brasilia").id, "brasilia")
        self.assertIsNone(self.catalog.resolve("Atlantis"))

    def test_list_sorted_by_name(self):
        names = [c.name for c in self.catalog.list()]
        self.assertEqual(len(names), 11)
        self.assertEqual(names[0], "Belo Horizonte")
        self.assertEqual(names[1], "Brasília")
        self.assertEqual(names[-1], "São Paulo")

    def test_upsert_and_remove(self):
        city = CityParameters(id="42", name="Goiânia", module_capacity_kw=160.0)
        self.catalog.upsert(city)
        self.assertEqual(len(self.catalog), 12)
        self.assertIn(42, self.catalog)
        self.assertEqual(self.catalog.get_by_id(42).name, "Goiânia")

        replacement = city.model_copy(update={"module_capacity_kw": 170.0})
        self.catalog.upsert(replacement)
        self.assertEqual(len(self.catalog), 12)
        self.assertEqual(self.catalog.get_by_id("42").module_capacity_kw, 170.0)

        self.assertTrue(self.catalog.remove("42"))
        self.assertFalse(self.catalog.remove("42"))
        self.assertEqual(len(self.catalog), 11)

    def test_city_parameters_are_frozen(self):
        city = self.catalog.get_by_id("recife")
        with self.assertRaises(ValidationError):
            city.module_capacity_kw = 1.0


def test_empty_catalog():
    catalog = CityCatalog()
    assert len(catalog) == 0
    assert catalog.list() == []
    assert catalog.resolve("sao-paulo") is None


def test_tariff_config_defaults_without_file():
    config = TariffConfig()
    assert config.get_current() == TariffConstants()


def test_tariff_config_update():
    config = TariffConfig.default()
    before = config.get_current()

    after = config.update(water_price_per_m3=12.0, sewage_tariff_percent=50)

    assert after.water_price_per_m3 == 12.0
    assert after.sewage_multiplier == pytest.approx(1.5)
    assert after.install_base_cost == before.install_base_cost
    assert config.get_current() is after
    # Earlier snapshots are immutable
    assert before.water_price_per_m3 == 10.50


def test_tariff_config_update_unknown_name():
    config = TariffConfig()
    with pytest.raises(ConfigurationError, match="Unknown tariff constants: preco"):
        config.update(preco=1.0)


def test_tariff_config_update_rejects_negative():
    config = TariffConfig()
    with pytest.raises(ValidationError):
        config.update(install_base_cost=-5)
    assert config.get_current().install_base_cost == 5000.0


def test_tariff_constants_accept_variable_names():
    tariffs = TariffConstants.from_variables([
        {"name": "vida_util_equipamento", "value": 15},
        {"name": " custo_implantacao_base ", "value": 7500},
    ])
    assert tariffs.equipment_lifetime_years == 15
    assert tariffs.install_base_cost == 7500

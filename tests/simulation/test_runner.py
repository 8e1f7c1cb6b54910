import json

import pytest

from dryconomy.core.exceptions import CityNotFoundError
from dryconomy.simulation.runner import main, run_simulation


def test_run_simulation_returns_plain_dict(catalog, tariff_config):
    result = run_simulation(500, "sao-paulo", catalog=catalog, tariff_config=tariff_config)

    assert result["dry_cooler"]["modules"] == 3
    assert result["operating_factor"] == 1.0
    assert result["comparison"]["yearly_difference_percent"] == pytest.approx(90.0)


def test_run_simulation_yearly_schedule(catalog, tariff_config):
    result = run_simulation(500, "São Paulo", hours_per_day=12, days_per_year=365,
                            catalog=catalog, tariff_config=tariff_config)

    assert result["schedule_basis"] == "yearly"
    assert result["operating_factor"] == pytest.approx(0.5)


def test_run_simulation_unknown_city(catalog, tariff_config):
    with pytest.raises(CityNotFoundError):
        run_simulation(500, "atlantis", catalog=catalog, tariff_config=tariff_config)


def test_main_prints_json(capsys):
    code = main(["--capacity", "500", "--city", "sao-paulo", "--hours", "12", "--days-per-week", "5"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["dry_cooler"]["modules"] == 3
    assert data["operating_factor"] == pytest.approx(12 / 24 * 5 / 7)


def test_main_writes_output_file(tmp_path, capsys):
    out = tmp_path / "result.json"

    code = main(["--capacity", "250", "--city", "Manaus", "--output", str(out)])

    assert code == 0
    assert capsys.readouterr().out == ""
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["dry_cooler"]["modules"] == 3


def test_main_list_cities(capsys):
    assert main(["--list-cities"]) == 0

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 11
    assert lines[0].startswith("belo-horizonte\tBelo Horizonte\t")
    assert lines[-1].endswith("kW")


@pytest.mark.parametrize("argv", [
    ["--capacity", "0", "--city", "sao-paulo"],
    ["--capacity", "500", "--city", "atlantis"],
    ["--capacity", "500", "--city", "sao-paulo", "--hours", "25"],
    ["--capacity", "500", "--city", "sao-paulo", "--cities", "missing.yaml"],
])
def test_main_invalid_input_exit_code(argv, capsys):
    assert main(argv) == 2
    assert capsys.readouterr().err.startswith("error: ")


def test_main_requires_capacity_and_city():
    with pytest.raises(SystemExit):
        main(["--city", "sao-paulo"])


def test_main_rejects_both_day_bases():
    with pytest.raises(SystemExit):
        main(["--capacity", "500", "--city", "sao-paulo", "--days-per-week", "5", "--days-per-year", "200"])

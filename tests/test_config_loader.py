from decimal import Decimal
from pathlib import Path

import pytest

yaml = pytest.importorskip("yaml")

from cppi_sim.config import compute_config_hash, load_config, serialize_config

CONFIG_DIR = Path(__file__).resolve().parent.parent / "configs"


def test_load_config_sample():
    config = load_config(CONFIG_DIR / "cppi_gspc.yaml")

    assert config.name == "cppi-gspc"
    assert config.version == "1"
    assert config.parameters.initial_portfolio == Decimal("100000")
    assert config.parameters.floor == Decimal("80000")
    assert config.parameters.max_loss_fraction == Decimal("0.2")
    assert config.parameters.multiplier == Decimal("5")
    assert config.prices.column == "Close"
    assert config.prices.path.resolve().name == "gspc_sample.csv"
    assert config.prices.path.exists()


def test_missing_required_key(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump({"name": "x", "version": 1, "parameters": {}}), encoding="utf-8")

    with pytest.raises(ValueError, match="prices"):
        load_config(path)


def test_non_mapping_document(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        load_config(path)


def test_parameter_defaults_and_relative_price_path(tmp_path):
    path = tmp_path / "partial.yaml"
    payload = {
        "name": "partial",
        "version": "2",
        "parameters": {"floor": 90000},
        "prices": {"path": "prices.csv", "column": 4},
    }
    path.write_text(yaml.safe_dump(payload), encoding="utf-8")

    config = load_config(path)
    assert config.run_id_prefix == "partial"
    assert config.parameters.floor == Decimal("90000")
    assert config.parameters.initial_portfolio == Decimal("100000")
    assert config.parameters.annual_interest_rate == Decimal("0.02")
    assert config.prices.path == tmp_path / "prices.csv"
    assert config.prices.column == 4
    assert config.report.show_ticks is True


def test_serialize_and_hash(tmp_path):
    source = CONFIG_DIR / "cppi_gspc.yaml"
    target = tmp_path / "cppi_gspc.yaml"
    target.write_text(source.read_text(encoding="utf-8"), encoding="utf-8")

    assert compute_config_hash(source) == compute_config_hash(target)
    payload = serialize_config(load_config(source))
    assert payload["parameters"]["max_loss_fraction"] == "0.2"
    assert isinstance(payload["prices"]["path"], str)

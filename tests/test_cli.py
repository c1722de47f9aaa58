import json
import sys

import pytest

from cppi_sim import cli

HEADER = "Date,Open,High,Low,Close,Adj Close,Volume\n"


def _prices(tmp_path, closes, name="prices.csv"):
    rows = "".join(f"2020-01-{day + 1:02d},0,0,0,{close},{close},0\n" for day, close in enumerate(closes))
    path = tmp_path / name
    path.write_text(HEADER + rows, encoding="utf-8")
    return path


def _run(monkeypatch, tmp_path, *args):
    argv = [
        "run_cppi.py",
        "--initial-portfolio", "1000",
        "--floor", "800",
        "--max-loss", "0.5",
        "--interest", "0",
        "--audit-log", str(tmp_path / "audit.log"),
        *args,
    ]
    monkeypatch.setattr(sys, "argv", argv)
    return cli.main()


def test_prints_ticks_and_summary(monkeypatch, capsys, tmp_path):
    prices = _prices(tmp_path, [100, 110, 121])

    assert _run(monkeypatch, tmp_path, "--prices", str(prices)) == cli.EXIT_OK

    out = capsys.readouterr().out.splitlines()
    assert out[:3] == ["1040.00", "1084.00", "Portfolio: $1084.00"]
    assert out[3].startswith("Return: ")


def test_quiet_prints_only_summary(monkeypatch, capsys, tmp_path):
    prices = _prices(tmp_path, [100, 110, 121])

    assert _run(monkeypatch, tmp_path, "--prices", str(prices), "--quiet") == cli.EXIT_OK

    captured = capsys.readouterr()
    out = captured.out.splitlines()
    assert len(out) == 2
    assert out[0] == "Portfolio: $1084.00"
    assert "[CPPI] COMPLETE" in captured.err


def test_output_writes_json_report(monkeypatch, capsys, tmp_path):
    prices = _prices(tmp_path, [100, 50, 200])
    output = tmp_path / "reports" / "run.json"

    assert _run(monkeypatch, tmp_path, "--prices", str(prices), "--output", str(output)) == cli.EXIT_OK

    report = json.loads(output.read_text(encoding="utf-8"))
    assert report["summary"]["exit_reason"] == "floor_breached"
    assert report["summary"]["final_portfolio_value"] == "800.00"
    assert report["config"]["name"] == "adhoc"
    assert "Floor reached, exiting position" in capsys.readouterr().out


def test_missing_prices_exit_code(monkeypatch, capsys, tmp_path):
    code = _run(monkeypatch, tmp_path, "--prices", str(tmp_path / "missing.csv"))

    assert code == cli.EXIT_SOURCE_MISSING
    err = capsys.readouterr().err
    assert "error: Price source not found" in err
    assert "[CPPI] PRICE_LOAD" in err


def test_malformed_prices_exit_code(monkeypatch, capsys, tmp_path):
    prices = _prices(tmp_path, [100, "null"])

    assert _run(monkeypatch, tmp_path, "--prices", str(prices)) == cli.EXIT_MALFORMED
    err = capsys.readouterr().err
    assert any(line.startswith("error: ") and "invalid price" in line for line in err.splitlines())


def test_missing_config_exit_code(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(sys, "argv", ["run_cppi.py", "--config", str(tmp_path / "nope.yaml")])

    assert cli.main() == cli.EXIT_BAD_CONFIG
    assert "error: config not found" in capsys.readouterr().err


def test_invalid_config_exit_code(monkeypatch, capsys, tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("name: [unclosed\n", encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["run_cppi.py", "--config", str(path)])

    assert cli.main() == cli.EXIT_BAD_CONFIG
    assert "error: invalid config" in capsys.readouterr().err


def test_non_numeric_flag_exit_code(monkeypatch, capsys, tmp_path):
    prices = _prices(tmp_path, [100, 110])

    assert _run(monkeypatch, tmp_path, "--prices", str(prices), "--floor", "lots") == cli.EXIT_BAD_CONFIG
    assert "error: invalid config" in capsys.readouterr().err


def test_config_run_uses_configured_prices(monkeypatch, capsys, tmp_path):
    yaml = pytest.importorskip("yaml")
    _prices(tmp_path, [100, 110])
    path = tmp_path / "config.yaml"
    payload = {
        "name": "cli",
        "version": 1,
        "parameters": {"initial_portfolio": 1000, "floor": 800, "max_loss_fraction": 0.5, "annual_interest_rate": 0},
        "prices": {"path": "prices.csv"},
        "monitoring": {"audit_log_path": str(tmp_path / "audit.log")},
        "report": {"show_ticks": False},
    }
    path.write_text(yaml.safe_dump(payload), encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["run_cppi.py", "--config", str(path)])

    assert cli.main() == cli.EXIT_OK
    assert capsys.readouterr().out.splitlines()[0] == "Portfolio: $1040.00"

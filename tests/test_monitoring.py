import io
from decimal import Decimal

from cppi_sim.monitoring import AuditLog, LogNotifier, Monitor
from cppi_sim.runtime import create_run_context


def test_log_notifier_writes_prefixed_lines():
    stream = io.StringIO()
    monitor = Monitor(LogNotifier(stream=stream))

    monitor.floor_breach(3, Decimal("799.99"), Decimal("800"))

    assert stream.getvalue() == (
        "[CPPI] FLOOR: portfolio 799.99 at or below floor 800 on tick 3, exiting position\n"
    )


def test_audit_log_keeps_decimal_cents_and_filters_runs(tmp_path):
    first = AuditLog(tmp_path / "audit.log", run_id="a")
    second = AuditLog(tmp_path / "audit.log", run_id="b")

    first.log("run_complete", {"final_portfolio_value": Decimal("1040.00")})
    second.log("run_failed", {"error": "PriceSourceNotFoundError"})

    assert first.events() == ["run_complete", "run_failed"]
    assert first.events(run_id="b") == ["run_failed"]
    assert first.read(run_id="a")[0]["payload"]["final_portfolio_value"] == "1040.00"


def test_adhoc_run_context_has_no_hash():
    context = create_run_context(None, "cppi")

    assert context.config_hash is None
    assert context.run_id.startswith("cppi-") and context.run_id.endswith("-adhoc")

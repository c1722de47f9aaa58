from __future__ import annotations

import json
import os
from pathlib import Path

import streamlit as st


def _load_json(path: Path) -> dict | None:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return None


def _format_currency(value: str | None) -> str:
    if value is None:
        return "n/a"
    return f"${float(value):,.2f}"


def main() -> None:
    st.set_page_config(page_title="CPPI Report", layout="wide")
    st.title("CPPI Simulation Report")

    default_report_path = os.getenv("CPPI_REPORT_PATH", "reports/cppi_report.json")
    report_path = Path(st.sidebar.text_input("Report path", value=default_report_path))

    report = _load_json(report_path)
    if report is None:
        st.warning(f"No report found at {report_path}")
        return

    summary = report.get("summary", {})
    col_a, col_b, col_c, col_d = st.columns(4)
    col_a.metric("Start", _format_currency(summary.get("initial_portfolio")))
    col_b.metric("Final", _format_currency(summary.get("final_portfolio_value")))
    col_c.metric("Return", f"{float(summary.get('total_return_percent', 0)):.2f}%")
    col_d.metric("Ticks", str(summary.get("ticks", 0)))

    st.subheader("Exit")
    if summary.get("terminated_early"):
        st.error(f"Floor reached on tick {summary.get('breach_tick')}, position exited")
    else:
        st.success("Price history exhausted without touching the floor")

    ticks = report.get("ticks", [])
    if ticks:
        st.subheader("Portfolio Value")
        st.line_chart({
            "portfolio": [float(tick["portfolio_value"]) for tick in ticks],
            "safe": [float(tick["safe_value"]) for tick in ticks],
            "risky": [float(tick["risky_value"]) for tick in ticks],
        })

    st.subheader("Details")
    st.json({
        "run_id": report.get("run_id"),
        "config_path": report.get("config_path"),
        "config_hash": report.get("config_hash"),
        "generated_at_utc": report.get("generated_at_utc"),
        "parameters": (report.get("config") or {}).get("parameters"),
    })


if __name__ == "__main__":
    main()

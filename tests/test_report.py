import json

import pytest

from tests.helpers import clone_state
from wealthplan.report import build_report, state_hash, write_report
from wealthplan.schema import FinancialState


@pytest.fixture
def sample_state(sample_state_dict) -> FinancialState:
    return FinancialState.from_dict(sample_state_dict)


def test_report_includes_required_sections(sample_state):
    report = build_report(sample_state, years=10, mode="projected", today="2024-01")

    for key in ("stateHash", "summary", "monthly", "wealth", "charts", "validation", "diagnostics"):
        assert key in report
    assert report["mode"] == "projected"
    assert len(report["wealth"]) == 11
    assert set(report["charts"]["wealth"]) == {"real", "projected"}
    assert report["charts"]["cashflow"]["months"][0] == "2024-01"
    assert len(report["charts"]["cashflow"]["months"]) == 12


def test_report_summary_values(sample_state):
    report = build_report(sample_state, years=1, mode="real", today="2024-01")
    summary = report["summary"]

    assert summary["averageFutureSurplus"] == pytest.approx(47500.0 / 12)
    assert summary["suggestedGoalContribution"] == pytest.approx(47500.0 / 12)
    assert summary["currentMonth"]["savings_rate_label"] == "excellent"
    assert summary["wealth"]["emergency_fund_goal"] == pytest.approx(43000.0 / 12 * 6)
    assert "deficitCoverage" not in summary
    assert report["wealth"][0]["contributed"] == 40000.0


def test_report_monthly_rows_match_projection(sample_state):
    report = build_report(sample_state, years=1, mode="real", today="2024-01")
    rows = {row["month"]: row for row in report["monthly"]}

    assert rows["2024-02"]["expense"] == 3750.0
    assert rows["2024-02"]["confirmedExpense"] == 250.0
    assert rows["2024-12"]["income"] == 10500.0


def test_report_adds_deficit_coverage_when_projected_negative(sample_state_dict):
    data = clone_state(sample_state_dict)
    data["records"].append({"id": "big", "categoryId": "rent", "month": "2024-01", "value": 20000})
    data["records"] = [r for r in data["records"] if r["id"] != "rec2"]
    state = FinancialState.from_dict(data)

    report = build_report(state, years=1, mode="projected", today="2024-01")

    coverage = report["summary"]["deficitCoverage"]
    assert coverage["withdrawals"][0]["account"] == "emergencyFund"
    assert coverage["uncovered"] == 0.0


def test_report_goal_timeline(sample_state):
    report = build_report(sample_state, years=1, mode="real", today="2024-01")
    goal = report["charts"]["goals"][0]

    assert goal["name"] == "New car"
    assert goal["months"] is not None
    assert goal["reachMonth"] > "2024-01"


def test_invalid_mode_raises(sample_state):
    with pytest.raises(ValueError):
        build_report(sample_state, years=1, mode="optimistic", today="2024-01")


def test_state_hash_is_stable(sample_state, sample_state_dict):
    assert state_hash(sample_state) == state_hash(FinancialState.from_dict(sample_state_dict))
    assert len(state_hash(sample_state)) == 12


def test_write_report_round_trips_json(tmp_path, sample_state):
    path = tmp_path / "report.json"
    report = build_report(sample_state, years=2, mode="projected", today="2024-01")

    write_report(path, report)

    assert json.loads(path.read_text(encoding="utf-8"))["stateHash"] == report["stateHash"]

import pytest

from wealthplan.cashflow import cashflow_forecast, month_summary, savings_rate_label
from wealthplan.projection import calculate_projections
from wealthplan.schema import FinancialState


@pytest.fixture
def sample_projection(sample_state_dict):
    state = FinancialState.from_dict(sample_state_dict)
    return state, calculate_projections(state, today="2024-01")


def test_month_summary_separates_realized_and_projected(sample_projection):
    _, projection = sample_projection
    summary = month_summary(projection, "2024-01")

    assert summary.income == 7000.0
    assert summary.expense == 3500.0
    assert summary.realized_performance == 7000.0 - 2300.0
    assert summary.projected_performance == 3500.0
    assert summary.savings_rate == pytest.approx(50.0)
    assert summary.savings_rate_label == "excellent"


def test_month_summary_lists_placeholders(sample_projection):
    _, projection = sample_projection
    summary = month_summary(projection, "2024-02")

    assert summary.projected_placeholders == {"salary": 7000.0, "rent": 2000.0, "groceries": 1200.0, "utilities": 300.0}
    assert summary.realized_performance == -250.0


def test_month_summary_outside_window_reports_zeros(sample_projection):
    _, projection = sample_projection
    summary = month_summary(projection, "1999-01")

    assert summary.income == 0.0
    assert summary.savings_rate == 0.0
    assert summary.savings_rate_label == "poor"


@pytest.mark.parametrize(("rate", "label"), [(30.0, "excellent"), (29.9, "good"), (15.0, "good"), (14.9, "poor"), (-5.0, "poor")])
def test_savings_rate_label_thresholds(rate, label):
    assert savings_rate_label(rate) == label


def test_cashflow_forecast_accumulates_surplus(sample_projection):
    state, projection = sample_projection
    points = cashflow_forecast(state, projection, "2024-01", months=3)

    assert [p.month for p in points] == ["2024-01", "2024-02", "2024-03"]
    assert [p.balance for p in points] == [8500.0, 11750.0, 15000.0]
    assert points[1].expense == 3750.0


def test_cashflow_forecast_defaults_to_twelve_months(sample_projection):
    state, projection = sample_projection
    points = cashflow_forecast(state, projection, "2024-01")

    assert len(points) == 12
    assert points[-1].month == "2024-12"
    assert points[-1].balance == pytest.approx(5000.0 + 47500.0)

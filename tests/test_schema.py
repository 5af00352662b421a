import math

import pytest

from tests.helpers import blank_state_dict, clone_state, write_state
from wealthplan.schema import FinancialState, SchemaError, load_state


def test_load_state_parses_sample(tmp_path, sample_state_dict):
    state = load_state(write_state(tmp_path, sample_state_dict))

    assert state.checking_account_balance == 5000.0
    assert [c.id for c in state.categories][:2] == ["salary", "freelance"]
    assert state.records[0].category_id == "salary"
    assert state.monthly_adjustments[0].confirmed_months == ["2024-02"]
    assert state.emergency_fund.settings.target_months == 6
    assert state.investments.settings.monthly_interest_rate == 0.8
    assert state.deficit_strategy == "emergency_first"
    assert state.financial_goals[0].monthly_contribution == 2000.0
    assert not state.diagnostics.has_issues


def test_load_state_rejects_non_object_root(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(SchemaError, match="state: root must be a JSON object"):
        load_state(path)


def test_load_state_requires_emergency_fund(tmp_path, sample_state_dict):
    data = clone_state(sample_state_dict)
    del data["emergencyFund"]

    with pytest.raises(SchemaError, match=r"state\.emergencyFund: missing required field"):
        load_state(write_state(tmp_path, data))


def test_load_state_rejects_wrong_collection_types(tmp_path, sample_state_dict):
    data = clone_state(sample_state_dict)
    data["records"] = {}

    with pytest.raises(SchemaError, match=r"records: expected array"):
        load_state(write_state(tmp_path, data))


def test_load_state_rejects_invalid_nested_object_type(tmp_path, sample_state_dict):
    data = clone_state(sample_state_dict)
    data["investments"]["settings"] = "bad"

    with pytest.raises(SchemaError, match=r"investments\.settings: expected object"):
        load_state(write_state(tmp_path, data))


def test_malformed_month_is_a_hard_failure(sample_state_dict):
    data = clone_state(sample_state_dict)
    data["records"][0]["month"] = "2024-13"

    with pytest.raises(SchemaError, match=r"records\[0\]\.month: '2024-13' is not valid"):
        FinancialState.from_dict(data)


def test_malformed_adjustment_end_month_is_a_hard_failure(sample_state_dict):
    data = clone_state(sample_state_dict)
    data["monthlyAdjustments"][0]["endMonth"] = "May 2024"

    with pytest.raises(SchemaError, match=r"monthlyAdjustments\[0\]\.endMonth"):
        FinancialState.from_dict(data)


@pytest.mark.parametrize(
    ("section", "expected"),
    [
        ("categories", r"categories\[1\]\.order: expected integer"),
        ("monthlyAdjustments", r"monthlyAdjustments\[1\]\.order: expected integer"),
    ],
)
def test_non_numeric_order_names_the_field(sample_state_dict, section, expected):
    data = clone_state(sample_state_dict)
    data[section][1]["order"] = "first"

    with pytest.raises(SchemaError, match=expected):
        FinancialState.from_dict(data)


def test_non_finite_amounts_are_coerced_to_zero(sample_state_dict):
    data = clone_state(sample_state_dict)
    data["records"][0]["value"] = math.nan
    data["investments"]["balance"] = math.inf
    data["checkingAccountBalance"] = "lots"
    data["assets"][0].pop("value")

    state = FinancialState.from_dict(data)

    assert state.records[0].value == 0.0
    assert state.investments.balance == 0.0
    assert state.checking_account_balance == 0.0
    assert state.assets[0].value == 0.0
    assert state.diagnostics.non_finite_fields == [
        "state.checkingAccountBalance",
        "records[0].value",
        "investments.balance",
        "assets[0].value",
    ]


def test_single_status_adjustment_confirms_start_month():
    data = blank_state_dict(
        monthlyAdjustments=[
            {"id": "a", "value": 100, "startMonth": "2024-04", "endMonth": None, "type": "income", "status": "confirmed"},
            {"id": "b", "value": 100, "startMonth": "2024-04", "endMonth": None, "type": "income", "status": "pending"},
        ]
    )
    state = FinancialState.from_dict(data)

    assert state.monthly_adjustments[0].confirmed_months == ["2024-04"]
    assert state.monthly_adjustments[1].confirmed_months == []
    assert state.monthly_adjustments[0].end_month is None


def test_optional_sections_use_defaults():
    state = FinancialState.from_dict(
        {
            "checkingAccountBalance": 0,
            "emergencyFund": {"balance": 100},
            "investments": {"balance": 200},
        }
    )

    assert state.categories == []
    assert state.surplus_allocation.emergency_fund == 50.0
    assert state.surplus_allocation.investments == 50.0
    assert state.surplus_allocation.checking_account == 0.0
    assert state.deficit_strategy == "emergency_first"
    assert state.emergency_fund.settings.goal_type == "months_of_expense"
    assert state.emergency_fund.settings.monthly_interest_rate == 0.5
    assert state.investments.settings.monthly_interest_rate == 0.8

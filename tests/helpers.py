import copy
import json
from pathlib import Path

from wealthplan.schema import FinancialState

SAMPLE_STATE = Path(__file__).resolve().parent.parent / "sample_state.json"


def write_state(tmp_path: Path, data: dict, filename: str = "state.json") -> Path:
    path = tmp_path / filename
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def clone_state(data: dict) -> dict:
    return copy.deepcopy(data)


def blank_state_dict(**overrides) -> dict:
    data = {
        "checkingAccountBalance": 0,
        "categories": [],
        "records": [],
        "monthlyAdjustments": [],
        "emergencyFund": {
            "balance": 0,
            "settings": {"goalType": "months_of_expense", "targetMonths": 6, "manualGoal": 30000, "monthlyInterestRate": 0},
        },
        "investments": {"balance": 0, "settings": {"monthlyInterestRate": 0}},
    }
    data.update(overrides)
    return data


def make_state(**overrides) -> FinancialState:
    return FinancialState.from_dict(blank_state_dict(**overrides))

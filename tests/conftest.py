import json

import pytest

from tests.helpers import SAMPLE_STATE


@pytest.fixture
def sample_state_dict() -> dict:
    return json.loads(SAMPLE_STATE.read_text(encoding="utf-8"))

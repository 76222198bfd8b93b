import pytest

from readiness_bot.service.health_analysis.common.data_models import Baseline
from tests import TEST_USER_ID


@pytest.fixture
def baseline() -> Baseline:
    return Baseline.default()


@pytest.fixture
def owner_env(monkeypatch):
    """Private handlers read the owner id from the environment."""
    monkeypatch.setenv("MY_TELEGRAM_USER_ID", str(TEST_USER_ID))
    return TEST_USER_ID

"""
Unit tests for MetricsRepository.

These tests run against an in-memory DuckDB database.
"""

import datetime as dt

import pytest

from readiness_bot.service.health_analysis.common.data_models import Goal, UserProfile
from readiness_bot.service.health_analysis.common.errors import DuplicateMetricsError
from readiness_bot.service.metrics_repository import MetricsRepository
from tests import END_DATE, TEST_USER_ID, make_day, make_week


@pytest.fixture
def repository():
    repository = MetricsRepository(":memory:")
    yield repository
    repository.close()


class TestMetricsRepository:
    def test_round_trip(self, repository):
        day = make_day(hrv=71.5, steps=12000, mood_score=4)

        repository.add_daily_metrics(TEST_USER_ID, day)

        assert repository.load_metrics(TEST_USER_ID) == [day]

    def test_metrics_are_returned_oldest_first(self, repository):
        week = make_week()
        repository.add_many(TEST_USER_ID, list(reversed(week)))

        assert [m.date for m in repository.load_metrics(TEST_USER_ID)] == [m.date for m in week]

    def test_limit_returns_most_recent_days(self, repository):
        repository.add_many(TEST_USER_ID, make_week())

        recent = repository.load_metrics(TEST_USER_ID, limit=3)

        assert [m.date for m in recent] == [END_DATE - dt.timedelta(days=d) for d in (2, 1, 0)]

    def test_duplicate_date_is_rejected(self, repository):
        repository.add_daily_metrics(TEST_USER_ID, make_day())

        with pytest.raises(DuplicateMetricsError):
            repository.add_daily_metrics(TEST_USER_ID, make_day(hrv=10.0))

        assert repository.load_metrics(TEST_USER_ID)[0].hrv == 60.0

    def test_add_many_skips_existing_days(self, repository):
        repository.add_daily_metrics(TEST_USER_ID, make_day())

        assert repository.add_many(TEST_USER_ID, make_week()) == 6
        assert len(repository.load_metrics(TEST_USER_ID)) == 7

    def test_add_many_rolls_back_on_duplicate(self, repository):
        repository.add_daily_metrics(TEST_USER_ID, make_day())

        with pytest.raises(DuplicateMetricsError):
            repository.add_many(TEST_USER_ID, make_week(), skip_existing=False)

        assert len(repository.load_metrics(TEST_USER_ID)) == 1

    def test_users_are_isolated(self, repository):
        repository.add_daily_metrics(TEST_USER_ID, make_day())

        assert repository.load_metrics(TEST_USER_ID + 1) == []
        assert repository.has_metrics(TEST_USER_ID, END_DATE)
        assert not repository.has_metrics(TEST_USER_ID + 1, END_DATE.isoformat())

    def test_profile_defaults_until_saved(self, repository):
        assert repository.load_profile(TEST_USER_ID) == UserProfile.default()

        profile = UserProfile(name="Alex", age=29, goal=Goal.BUILD_MUSCLE, onboarding_complete=True)
        repository.save_profile(TEST_USER_ID, profile)
        repository.save_profile(TEST_USER_ID, profile.model_copy(update={"exam_phase": True}))

        loaded = repository.load_profile(TEST_USER_ID)
        assert loaded.goal == Goal.BUILD_MUSCLE
        assert loaded.exam_phase is True

    def test_file_backed_database(self, tmp_path):
        db_path = tmp_path / "nested" / "metrics.duckdb"
        repository = MetricsRepository(db_path)
        repository.add_daily_metrics(TEST_USER_ID, make_day())
        repository.close()

        reopened = MetricsRepository(db_path)
        assert len(reopened.load_metrics(TEST_USER_ID)) == 1
        reopened.close()

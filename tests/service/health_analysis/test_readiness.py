import pytest

from readiness_bot.service.health_analysis.common.data_models import Baseline
from readiness_bot.service.health_analysis.core_metrics.readiness import compute_readiness, sleep_quality_factor
from tests import make_day, make_week


class TestReadiness:
    def test_baseline_day_scores_full_marks(self, baseline):
        readiness = compute_readiness(make_day(), baseline, make_week())

        assert readiness.score == 100
        assert readiness.explanation == ["Good sleep quality"]

    def test_hrv_drop_scenario(self, baseline):
        today = make_day(hrv=48.0, training_load=0, mood_score=4, energy_score=4)

        readiness = compute_readiness(today, baseline, [])

        assert readiness.score == 75
        assert "HRV significantly below baseline - high stress or fatigue" in readiness.explanation

    def test_every_rule_firing_is_clamped_to_zero(self, baseline):
        today = make_day(
            sleep_hours=4.0,
            sleep_efficiency=60.0,
            hrv=30.0,
            resting_hr=80.0,
            training_load=90,
            mood_score=1,
            energy_score=1,
            stress_score=90,
        )

        readiness = compute_readiness(today, baseline, [])

        assert readiness.score == 0
        assert readiness.explanation == [
            "Poor sleep quality impacting recovery",
            "HRV significantly below baseline - high stress or fatigue",
            "Elevated resting heart rate - possible overtraining or illness",
            "High training load - need recovery",
            "Low mood or energy levels",
            "High stress levels",
        ]

    @pytest.mark.parametrize(
        "overrides, expected_score, expected_reason",
        [
            ({"sleep_efficiency": 75.0}, 90, "Sleep could be better"),
            ({"hrv": 55.0}, 90, "HRV slightly below baseline"),
            ({"hrv": 66.0}, 100, "HRV above baseline - good recovery"),
            ({"resting_hr": 64.0}, 90, "Slightly elevated resting heart rate"),
            ({"energy_score": 2}, 85, "Low mood or energy levels"),
        ],
    )
    def test_single_rules(self, baseline, overrides, expected_score, expected_reason):
        readiness = compute_readiness(make_day(**overrides), baseline, [])

        assert readiness.score == expected_score
        assert expected_reason in readiness.explanation

    def test_recent_window_does_not_change_score(self, baseline):
        today = make_day(hrv=50.0)
        bad_week = make_week(hrv=20.0, stress_score=95)

        assert compute_readiness(today, baseline, bad_week) == compute_readiness(today, baseline, [])

    def test_zero_baseline_sleep_does_not_divide_by_zero(self):
        baseline = Baseline.default().model_copy(update={"sleep_hours": 0.0})

        assert sleep_quality_factor(make_day(), baseline) == pytest.approx(85.0)
        assert 0 <= compute_readiness(make_day(), baseline, []).score <= 100

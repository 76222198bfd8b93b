from readiness_bot.service.health_analysis.common.data_models import BurnoutLevel
from readiness_bot.service.health_analysis.core_metrics.burnout_risk import compute_burnout_risk, risk_level
from tests import make_day, make_week


def week_with_low_recent_hrv(**overrides):
    """Last 3 days at 80% of the default HRV baseline."""
    return [make_day(offset, hrv=48.0 if offset < 3 else 60.0, **overrides) for offset in range(6, -1, -1)]


class TestBurnoutRisk:
    def test_stable_week_is_green(self, baseline):
        risk = compute_burnout_risk(make_week(), baseline)

        assert risk.level == BurnoutLevel.GREEN
        assert risk.risk_score == 0
        assert risk.rationale == ["All key recovery markers are stable"]

    def test_hrv_decline_alone_is_yellow(self, baseline):
        risk = compute_burnout_risk(week_with_low_recent_hrv(), baseline)

        assert risk.level == BurnoutLevel.YELLOW
        assert risk.risk_score == 30
        assert risk.rationale == ["HRV has been declining for 3+ days"]

    def test_only_last_three_days_count_for_hrv(self, baseline):
        window = [make_day(offset, hrv=30.0 if offset >= 3 else 60.0) for offset in range(6, -1, -1)]

        assert compute_burnout_risk(window, baseline).risk_score == 0

    def test_penalties_are_additive(self, baseline):
        hrv_only = compute_burnout_risk(week_with_low_recent_hrv(), baseline).risk_score
        rhr_only = compute_burnout_risk(make_week(resting_hr=70.0), baseline).risk_score
        both = compute_burnout_risk(week_with_low_recent_hrv(resting_hr=70.0), baseline).risk_score

        assert rhr_only == 25
        assert both == hrv_only + rhr_only

    def test_everything_firing_is_red(self, baseline):
        window = week_with_low_recent_hrv(resting_hr=70.0, sleep_efficiency=70.0, stress_score=80, mood_score=2)

        risk = compute_burnout_risk(window, baseline)

        assert risk.level == BurnoutLevel.RED
        assert risk.risk_score == 100
        assert len(risk.rationale) == 4
        assert risk.actions[-1] == "Consider consulting a healthcare professional"

    def test_high_stress_needs_low_mood_or_energy(self, baseline):
        assert compute_burnout_risk(make_week(stress_score=80), baseline).risk_score == 0
        assert compute_burnout_risk(make_week(stress_score=80, energy_score=2), baseline).risk_score == 25

    def test_short_window_uses_available_days(self, baseline):
        risk = compute_burnout_risk([make_day(hrv=40.0)], baseline)

        assert risk.level == BurnoutLevel.YELLOW
        assert risk.risk_score == 30

    def test_empty_window_is_green(self, baseline):
        assert compute_burnout_risk([], baseline).level == BurnoutLevel.GREEN

    def test_risk_level_boundaries(self):
        assert risk_level(24) == BurnoutLevel.GREEN
        assert risk_level(25) == BurnoutLevel.YELLOW
        assert risk_level(49) == BurnoutLevel.YELLOW
        assert risk_level(50) == BurnoutLevel.RED

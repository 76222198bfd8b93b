from readiness_bot.service.health_analysis.core_metrics.anomalies import detect_anomalies
from tests import make_day


class TestAnomalies:
    def test_today_equal_to_baseline_has_no_anomalies(self, baseline):
        assert detect_anomalies(make_day(), baseline) == []

    def test_anomalies_are_reported_in_fixed_order(self, baseline):
        today = make_day(hrv=48.0, resting_hr=70.0, sleep_efficiency=70.0)

        anomalies = detect_anomalies(today, baseline)

        assert [a.metric for a in anomalies] == ["Resting Heart Rate", "Heart Rate Variability", "Sleep Efficiency"]

    def test_deviation_text(self, baseline):
        anomalies = detect_anomalies(make_day(hrv=48.0), baseline)

        assert len(anomalies) == 1
        assert anomalies[0].deviation == "20.0% below baseline"
        assert "prioritize sleep" in anomalies[0].suggestion

    def test_values_just_inside_thresholds(self, baseline):
        # Just inside the +10% resting HR and -15% HRV limits
        assert detect_anomalies(make_day(resting_hr=65.9, hrv=51.1), baseline) == []

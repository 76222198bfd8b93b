import datetime as dt
import random

from readiness_bot.service.mock_data import generate_mock_metrics


def test_history_shape():
    end_date = dt.date(2025, 5, 14)

    history = generate_mock_metrics(days=30, end_date=end_date, rng=random.Random(7))

    assert len(history) == 30
    assert history[-1].date == end_date
    assert history[0].date == end_date - dt.timedelta(days=29)
    assert all(a.date < b.date for a, b in zip(history, history[1:]))
    assert all(1 <= m.mood_score <= 5 and 0 <= m.stress_score <= 100 for m in history)


def test_seeded_history_is_reproducible():
    end_date = dt.date(2025, 5, 14)

    first = generate_mock_metrics(end_date=end_date, rng=random.Random(3))
    second = generate_mock_metrics(end_date=end_date, rng=random.Random(3))

    assert first == second


def test_exam_week_is_more_stressful_than_recovery():
    history = generate_mock_metrics(days=30, end_date=dt.date(2025, 5, 14), rng=random.Random(11))

    recovery = history[17:24]
    exam_week = history[24:]
    assert sum(m.stress_score for m in exam_week) / 6 > sum(m.stress_score for m in recovery) / 7

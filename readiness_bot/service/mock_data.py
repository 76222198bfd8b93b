"""
Synthetic metrics history for demos and tests.

The generated history walks through four phases (normal, exam prep, recovery, exam
week) so the scores and agents have something interesting to react to.
"""

import datetime as dt
import random
from typing import List, NamedTuple, Optional

from readiness_bot.service.health_analysis.common.data_models import DailyMetrics


class Phase(NamedTuple):
    name: str
    days: int
    stress: float


PHASES = [
    Phase("normal", 10, 40),
    Phase("exam_prep", 7, 70),
    Phase("recovery", 7, 30),
    Phase("exam_week", 6, 85),
]


def _bounded(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def generate_mock_metrics(
    days: int = 30, end_date: Optional[dt.date] = None, rng: Optional[random.Random] = None
) -> List[DailyMetrics]:
    """
    Generate a realistic-looking metrics history.

    Args:
        days: Number of days to generate.
        end_date: Date of the last (most recent) record. Defaults to today.
        rng: Random source; pass a seeded one for a reproducible history.

    Returns:
        Daily metrics ordered oldest to newest.
    """
    rng = rng or random.Random()
    end_date = end_date or dt.date.today()

    metrics = []
    phase_index = 0
    days_in_phase = 0
    for offset in range(days - 1, -1, -1):
        date = end_date - dt.timedelta(days=offset)

        days_in_phase += 1
        if days_in_phase > PHASES[phase_index].days and phase_index < len(PHASES) - 1:
            phase_index += 1
            days_in_phase = 1
        stress = PHASES[phase_index].stress
        is_weekend = date.weekday() >= 5

        base_hrv = 65 - stress / 5
        base_resting_hr = 55 + stress / 4
        base_sleep = 8.5 if is_weekend else 7.2
        base_sleep_efficiency = 88 - stress / 5
        base_mood = 3.5 - stress / 40

        if is_weekend:
            workout_minutes = rng.randrange(60)
        else:
            workout_minutes = rng.randrange(30) if stress > 70 else rng.randrange(60)

        metrics.append(
            DailyMetrics(
                date=date,
                sleep_hours=round(_bounded(base_sleep + rng.uniform(-0.75, 0.75), 5, 10), 2),
                sleep_efficiency=round(_bounded(base_sleep_efficiency + rng.uniform(-6, 6), 60, 98), 1),
                hrv=round(_bounded(base_hrv + rng.uniform(-7.5, 7.5), 35, 90), 1),
                resting_hr=round(_bounded(base_resting_hr + rng.uniform(-4, 4), 45, 75), 1),
                steps=rng.randrange(5000, 13000) if is_weekend else rng.randrange(7000, 15000),
                workout_minutes=workout_minutes,
                training_load=rng.randrange(30, 60) if stress > 70 else rng.randrange(40, 80),
                stress_score=round(_bounded(stress + rng.uniform(-10, 10), 20, 95), 1),
                mood_score=int(_bounded(round(base_mood + rng.uniform(-0.5, 0.5)), 1, 5)),
                energy_score=int(_bounded(round(base_mood + rng.uniform(-0.5, 0.5)), 1, 5)),
            )
        )

    return metrics

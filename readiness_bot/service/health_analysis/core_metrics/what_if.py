"""
What-if simulation module.

Maps an activity choice to its predicted effect on tomorrow's readiness, sleep and
recovery. Matching is a case-insensitive substring search over the label and the first
matching rule wins.
"""

from typing import List, NamedTuple, Tuple

from readiness_bot.service.health_analysis.common.data_models import Baseline, DailyMetrics, WhatIfResult


class WhatIfRule(NamedTuple):
    keywords: Tuple[str, ...]
    readiness_delta: float
    sleep_delta: float
    recovery_delta: float
    explanation: str


# Checked in order; the first rule with a keyword found in the label wins.
WHAT_IF_RULES: List[WhatIfRule] = [
    WhatIfRule(
        ("zone-2", "zone 2"),
        -5,
        0,
        5,
        "Zone-2 cardio improves aerobic base without taxing recovery. Minimal impact on tomorrow's readiness.",
    ),
    WhatIfRule(
        ("hiit",), -15, -0.5, -10, "HIIT is demanding. Expect lower readiness tomorrow. Requires 48hr recovery."
    ),
    WhatIfRule(
        ("strength",),
        -10,
        0,
        -5,
        "Strength training causes muscle fatigue. Moderate impact on readiness. Good if well-rested.",
    ),
    WhatIfRule(("rest",), 10, 0.5, 15, "Full rest accelerates recovery. Expect improved readiness and mood tomorrow."),
    WhatIfRule(
        ("extra sleep", "early bed"),
        12,
        1,
        20,
        "Extra sleep is the #1 recovery tool. Boosts HRV, lowers resting HR, improves mood.",
    ),
]

DEFAULT_WHAT_IF = WhatIfResult(
    readiness_delta=-8,
    sleep_delta=0,
    recovery_delta=0,
    explanation="Moderate activity. Slight impact on readiness.",
)

# Preset choices offered to the user.
WHAT_IF_OPTIONS = [
    "30min Zone-2 Run",
    "30min HIIT Session",
    "45min Strength Training",
    "Full Rest Day",
    "Extra Sleep Tonight (+1hr)",
]


def simulate_what_if(option_label: str, baseline: Baseline, today: DailyMetrics) -> WhatIfResult:
    """
    Simulate the impact of an activity choice.

    Args:
        option_label: Free-text activity description.
        baseline: The user's baseline. Accepted for interface stability; currently unused.
        today: Today's metrics. Accepted for interface stability; currently unused.

    Returns:
        WhatIfResult of the first matching rule, or the moderate-activity default.
    """
    option = (option_label or "").lower()
    for rule in WHAT_IF_RULES:
        if any(keyword in option for keyword in rule.keywords):
            return WhatIfResult(
                readiness_delta=rule.readiness_delta,
                sleep_delta=rule.sleep_delta,
                recovery_delta=rule.recovery_delta,
                explanation=rule.explanation,
            )
    return DEFAULT_WHAT_IF.model_copy()

"""Markdown renderers for engine results shown in Telegram."""

import re
from typing import List, Sequence

from telegram.helpers import escape_markdown

from readiness_bot.service.health_analysis.common.data_models import (
    AgentRecommendation,
    Anomaly,
    BurnoutLevel,
    BurnoutRisk,
    DailyPlan,
    Priority,
    ReadinessScore,
    SleepOption,
    SleepVerdict,
    UserProfile,
    WhatIfResult,
)

LEVEL_EMOJI = {BurnoutLevel.GREEN: "🟢", BurnoutLevel.YELLOW: "🟡", BurnoutLevel.RED: "🔴"}
PRIORITY_EMOJI = {Priority.HIGH: "❗", Priority.MEDIUM: "🔸", Priority.LOW: "▫️"}
VERDICT_EMOJI = {SleepVerdict.IDEAL: "✅", SleepVerdict.ACCEPTABLE: "⚡", SleepVerdict.RISKY: "⚠️"}
_MARKDOWN_SPECIALS = re.compile(r"([_*`\[])")


def _signed(value: float) -> str:
    return f"{value:+g}"


def _bold(text: str) -> str:
    """Bold user text. Legacy Markdown cannot escape inside an entity, so specials are kept outside of it."""
    parts = _MARKDOWN_SPECIALS.split(text)
    return "".join(
        escape_markdown(part) if _MARKDOWN_SPECIALS.fullmatch(part) else (f"*{part}*" if part.strip() else part)
        for part in parts
        if part
    )


def format_readiness(readiness: ReadinessScore) -> str:
    if readiness.score >= 80:
        emoji = "💪"
    elif readiness.score >= 60:
        emoji = "🙂"
    elif readiness.score >= 40:
        emoji = "😐"
    else:
        emoji = "🛌"
    lines = [f"{emoji} *READINESS: {readiness.score}/100* {emoji}\n"]
    lines.extend(f"• {reason}" for reason in readiness.explanation)
    return "\n".join(lines)


def format_burnout(burnout: BurnoutRisk) -> str:
    emoji = LEVEL_EMOJI[burnout.level]
    lines = [f"{emoji} *BURNOUT RISK: {burnout.level.value.upper()}* {emoji}\n", "*Why:*"]
    lines.extend(f"• {reason}" for reason in burnout.rationale)
    lines.append("\n*What to do:*")
    lines.extend(f"• {action}" for action in burnout.actions)
    return "\n".join(lines)


def format_anomalies(anomalies: Sequence[Anomaly]) -> str:
    if not anomalies:
        return "✅ *No anomalies today* ✅\n\nAll markers are within range of your baseline."
    lines = ["🚨 *ANOMALIES DETECTED* 🚨\n"]
    for anomaly in anomalies:
        lines.append(
            f"*{anomaly.metric}*: {anomaly.deviation}\n"
            f"🔎 {anomaly.cause}\n"
            f"💡 {anomaly.suggestion}\n"
        )
    return "\n".join(lines)


def format_recommendations(recommendations: Sequence[AgentRecommendation]) -> str:
    if not recommendations:
        return "🤖 *No recommendations right now* 🤖\n\nKeep doing what you're doing!"
    lines = ["🤖 *TODAY'S RECOMMENDATIONS* 🤖\n"]
    for recommendation in recommendations:
        lines.append(
            f"{PRIORITY_EMOJI[recommendation.priority]} {_bold(recommendation.title)}\n"
            f"{escape_markdown(recommendation.rationale)}\n"
            f"_{recommendation.agent}_\n"
        )
    return "\n".join(lines)


def format_daily_plan(plan: DailyPlan) -> str:
    lines = [
        "🎯 *TODAY'S FOCUS* 🎯\n",
        f"🏋️ Training intensity: *{plan.training_intensity.value}*",
        f"📊 Readiness: *{plan.readiness.score}/100*",
        f"🌙 Sleep target: *{plan.sleep_target_hours:g}h*\n",
        "*Top priorities:*",
    ]
    lines.extend(f"{idx}. {priority}" for idx, priority in enumerate(plan.priorities, start=1))
    return "\n".join(lines)


def format_what_if(option_label: str, result: WhatIfResult) -> str:
    return (
        f"🔮 *WHAT IF:* {_bold(option_label)} 🔮\n\n"
        f"📊 Readiness tomorrow: `{_signed(result.readiness_delta)}`\n"
        f"🌙 Sleep: `{_signed(result.sleep_delta)}h`\n"
        f"🔋 Recovery: `{_signed(result.recovery_delta)}`\n\n"
        f"💬 {result.explanation}"
    )


def format_sleep_options(options: Sequence[SleepOption]) -> str:
    lines: List[str] = ["🌙 *SLEEP OPTIONS* 🌙\n"]
    for option in options:
        lines.append(
            f"{VERDICT_EMOJI[option.recommendation]} *{option.bedtime} → {option.wake_time}* "
            f"({option.sleep_hours:g}h, {option.recommendation.value})\n"
            f"Readiness `{option.readiness_impact:+d}`, recovery `{option.recovery_impact:+d}`\n"
            f"{option.reasoning}\n"
        )
    return "\n".join(lines)


def format_profile(profile: UserProfile) -> str:
    return (
        "👤 *YOUR PROFILE* 👤\n\n"
        f"Name: {_bold(profile.name or '-')}\n"
        f"Age: *{profile.age if profile.age is not None else '-'}*\n"
        f"Goal: *{profile.goal.value.replace('_', ' ')}*\n"
        f"Chronotype: *{profile.chronotype.value}*\n"
        f"Training sessions per week: *{profile.training_frequency}*\n"
        f"Sleep need: *{profile.baseline_sleep_need:g}h*\n"
        f"Exam phase: *{'yes' if profile.exam_phase else 'no'}*"
    )

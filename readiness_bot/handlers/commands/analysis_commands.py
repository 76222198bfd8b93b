#!/usr/bin/env python3
"""
Command handlers for the analysis engine.

Each command loads the owner's history, runs one part of the engine and replies with a
formatted summary.
"""

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import CallbackContext, CommandHandler

from readiness_bot.handlers.base.private_handler import PrivateHandler
from readiness_bot.handlers.formatting import (
    format_anomalies,
    format_burnout,
    format_daily_plan,
    format_profile,
    format_readiness,
    format_recommendations,
)
from readiness_bot.service.metrics_repository import MetricsRepository
from readiness_bot.service.mock_data import generate_mock_metrics
from readiness_bot.service.recommendation_service import RecommendationService


class AnalysisHandler(PrivateHandler):
    def __init__(self, recommendation_service: RecommendationService) -> None:
        super().__init__()
        self.recommendation_service = recommendation_service


class ReadinessHandler(AnalysisHandler):
    """Handler for the /readiness command."""

    async def _handle(self, update: Update, context: CallbackContext) -> None:
        readiness = self.recommendation_service.readiness(update.effective_user.id)
        await update.message.reply_text(format_readiness(readiness), parse_mode=ParseMode.MARKDOWN)


class BurnoutHandler(AnalysisHandler):
    """Handler for the /burnout command."""

    async def _handle(self, update: Update, context: CallbackContext) -> None:
        burnout = self.recommendation_service.burnout_risk(update.effective_user.id)
        await update.message.reply_text(format_burnout(burnout), parse_mode=ParseMode.MARKDOWN)


class AnomaliesHandler(AnalysisHandler):
    """Handler for the /anomalies command."""

    async def _handle(self, update: Update, context: CallbackContext) -> None:
        anomalies = self.recommendation_service.anomalies(update.effective_user.id)
        await update.message.reply_text(format_anomalies(anomalies), parse_mode=ParseMode.MARKDOWN)


class PlanHandler(AnalysisHandler):
    """Handler for the /plan command."""

    async def _handle(self, update: Update, context: CallbackContext) -> None:
        plan = self.recommendation_service.daily_plan(update.effective_user.id)
        await update.message.reply_text(format_daily_plan(plan), parse_mode=ParseMode.MARKDOWN)


class RecommendationsHandler(AnalysisHandler):
    """Handler for the /recommendations command. Runs every registered agent."""

    async def _handle(self, update: Update, context: CallbackContext) -> None:
        await update.message.reply_text("🤖 Asking the agents...")
        recommendations = await self.recommendation_service.recommendations(update.effective_user.id)
        await update.message.reply_text(format_recommendations(recommendations), parse_mode=ParseMode.MARKDOWN)


class ProfileHandler(AnalysisHandler):
    """Handler for the /profile command."""

    async def _handle(self, update: Update, context: CallbackContext) -> None:
        profile = self.recommendation_service.repository.load_profile(update.effective_user.id)
        reply = format_profile(profile)
        if not profile.onboarding_complete:
            reply += "\n\nRun /setup\\_profile to personalise your plan."
        await update.message.reply_text(reply, parse_mode=ParseMode.MARKDOWN)


def get_analysis_commands(recommendation_service: RecommendationService) -> list[CommandHandler]:
    """
    Returns the command handlers for the analysis commands.

    Args:
        recommendation_service: The RecommendationService to use.

    Returns:
        CommandHandlers for /readiness, /burnout, /anomalies, /plan, /recommendations and /profile.
    """
    handlers = {
        "readiness": ReadinessHandler,
        "burnout": BurnoutHandler,
        "anomalies": AnomaliesHandler,
        "plan": PlanHandler,
        "recommendations": RecommendationsHandler,
        "profile": ProfileHandler,
    }
    return [CommandHandler(command, cls(recommendation_service).handle) for command, cls in handlers.items()]


class SeedDemoHandler(PrivateHandler):
    """Handler for the /seed_demo command. Loads a synthetic 30-day history."""

    def __init__(self, repository: MetricsRepository) -> None:
        super().__init__()
        self.repository = repository

    async def _handle(self, update: Update, context: CallbackContext) -> None:
        days = 30
        if context.args:
            try:
                days = max(1, min(365, int(context.args[0])))
            except ValueError:
                await update.message.reply_text("❌ Usage: /seed_demo [days]")
                return

        written = self.repository.add_many(update.effective_user.id, generate_mock_metrics(days=days))
        await update.message.reply_text(
            f"🧪 *Demo data loaded* 🧪\n\nStored {written} new days of metrics. Try /readiness or /recommendations.",
            parse_mode=ParseMode.MARKDOWN,
        )


def get_seed_demo_command(repository: MetricsRepository) -> CommandHandler:
    return CommandHandler("seed_demo", SeedDemoHandler(repository).handle)

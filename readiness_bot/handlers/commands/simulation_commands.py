from telegram import ReplyKeyboardMarkup, ReplyKeyboardRemove, Update
from telegram.constants import ParseMode
from telegram.ext import CallbackContext, CommandHandler

from readiness_bot.handlers.base.private_handler import PrivateHandler
from readiness_bot.handlers.formatting import format_sleep_options, format_what_if
from readiness_bot.service.health_analysis.core_metrics.what_if import WHAT_IF_OPTIONS
from readiness_bot.service.recommendation_service import RecommendationService
from readiness_bot.utils import parse_clock_time


class WhatIfHandler(PrivateHandler):
    """/whatif <activity> - predicted impact of an activity on tomorrow."""

    def __init__(self, recommendation_service: RecommendationService) -> None:
        super().__init__()
        self.recommendation_service = recommendation_service

    async def _handle(self, update: Update, context: CallbackContext) -> None:
        if not context.args:
            await update.message.reply_text(
                "🔮 *WHAT IF...* 🔮\n\nSend `/whatif <activity>`, e.g. `/whatif 30min HIIT Session`.",
                reply_markup=ReplyKeyboardMarkup(
                    [[f"/whatif {option}"] for option in WHAT_IF_OPTIONS],
                    one_time_keyboard=True,
                    input_field_placeholder="Pick an activity",
                ),
                parse_mode=ParseMode.MARKDOWN,
            )
            return

        option_label = " ".join(context.args)
        result = self.recommendation_service.what_if(update.effective_user.id, option_label)
        await update.message.reply_text(
            format_what_if(option_label, result), parse_mode=ParseMode.MARKDOWN, reply_markup=ReplyKeyboardRemove()
        )


class SleepOptionsHandler(PrivateHandler):
    """/sleep_options <bedtime> <wake time> [earliest event tomorrow]"""

    def __init__(self, recommendation_service: RecommendationService) -> None:
        super().__init__()
        self.recommendation_service = recommendation_service

    async def _handle(self, update: Update, context: CallbackContext) -> None:
        if not context.args or len(context.args) < 2:
            await update.message.reply_text(
                "🌙 Usage: `/sleep_options 23:30 07:00 [08:00]`\n"
                "Bedtime, wake time and optionally tomorrow's first appointment.",
                parse_mode=ParseMode.MARKDOWN,
            )
            return

        try:
            times = [parse_clock_time(arg) for arg in context.args[:3]]
        except ValueError as e:
            await update.message.reply_text(f"❌ {e}")
            return

        desired_bedtime, wake_time = times[0], times[1]
        early_event_hour = times[2] if len(times) > 2 else None
        options = self.recommendation_service.sleep_options(
            update.effective_user.id, desired_bedtime, wake_time, early_event_hour
        )
        await update.message.reply_text(format_sleep_options(options), parse_mode=ParseMode.MARKDOWN)


def get_what_if_command(recommendation_service: RecommendationService) -> CommandHandler:
    return CommandHandler("whatif", WhatIfHandler(recommendation_service).handle)


def get_sleep_options_command(recommendation_service: RecommendationService) -> CommandHandler:
    return CommandHandler("sleep_options", SleepOptionsHandler(recommendation_service).handle)

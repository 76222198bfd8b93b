import datetime as dt
import math
from typing import NamedTuple, Optional

from loguru import logger
from telegram import ReplyKeyboardMarkup, ReplyKeyboardRemove, Update
from telegram.constants import ParseMode
from telegram.ext import CallbackContext, CommandHandler, ContextTypes, ConversationHandler, MessageHandler, filters

from readiness_bot.handlers.base.private_handler import PrivateHandler
from readiness_bot.service.health_analysis.common.data_models import DailyMetrics
from readiness_bot.service.health_analysis.common.errors import DuplicateMetricsError
from readiness_bot.service.metrics_repository import MetricsRepository

SLEEP_HOURS, SLEEP_EFFICIENCY, HRV, RESTING_HR, TRAINING_LOAD, STRESS, MOOD, ENERGY = range(8)
score_reply_keyboard = [["1", "2", "3", "4", "5"]]


class CheckinStep(NamedTuple):
    field: str
    prompt: str
    keyboard: Optional[list] = None


# Prompt shown when entering each state
STEPS = {
    SLEEP_HOURS: CheckinStep("sleep_hours", "😴 *Sleep* 😴\n\nHow many hours did you sleep? (e.g. 7.5)"),
    SLEEP_EFFICIENCY: CheckinStep("sleep_efficiency", "🛏️ *Sleep Efficiency* 🛏️\n\nSleep efficiency in % (e.g. 88)"),
    HRV: CheckinStep("hrv", "💓 *HRV* 💓\n\nLast night's HRV in ms"),
    RESTING_HR: CheckinStep("resting_hr", "❤️ *Resting Heart Rate* ❤️\n\nResting heart rate in bpm"),
    TRAINING_LOAD: CheckinStep(
        "training_load", "🏋️ *Training Load* 🏋️\n\nYesterday's training load, 0-100 (0 for none)"
    ),
    STRESS: CheckinStep("stress_score", "🧠 *Stress* 🧠\n\nStress score, 0-100"),
    MOOD: CheckinStep("mood_score", "🙂 *Mood* 🙂\n\nHow is your mood? (1-5)", score_reply_keyboard),
    ENERGY: CheckinStep("energy_score", "⚡ *Energy* ⚡\n\nHow is your energy? (1-5)", score_reply_keyboard),
}


async def _ask(update: Update, state: int) -> int:
    step = STEPS[state]
    reply_markup = None
    if step.keyboard:
        reply_markup = ReplyKeyboardMarkup(step.keyboard, one_time_keyboard=True, input_field_placeholder="1-5")
    await update.message.reply_text(step.prompt, reply_markup=reply_markup, parse_mode=ParseMode.MARKDOWN)
    return state


class StartHandler(PrivateHandler):
    def __init__(self, repository: MetricsRepository):
        super().__init__()
        self.repository = repository

    async def _handle(self, update: Update, context: CallbackContext) -> int:
        if self.repository.has_metrics(update.effective_user.id, dt.date.today()):
            await update.message.reply_text(
                "✅ *Already checked in today* ✅\n\nSee /readiness for today's score.", parse_mode=ParseMode.MARKDOWN
            )
            return ConversationHandler.END

        context.user_data.clear()
        await update.message.reply_text("📋 *DAILY CHECK-IN* 📋", parse_mode=ParseMode.MARKDOWN)
        return await _ask(update, SLEEP_HOURS)


class StepHandler(PrivateHandler):
    """Stores the numeric answer for one state and asks the next question."""

    def __init__(self, state: int):
        super().__init__()
        self.state = state

    async def _handle(self, update: Update, context: CallbackContext) -> int:
        step = STEPS[self.state]
        try:
            value = float(update.message.text.strip().replace(",", "."))
        except ValueError:
            value = math.nan
        if not math.isfinite(value):
            await update.message.reply_text("❌ *Please send a number!*", parse_mode=ParseMode.MARKDOWN)
            return self.state

        context.user_data[step.field] = value
        return await _ask(update, self.state + 1)


class EnergyHandler(PrivateHandler):
    def __init__(self, repository: MetricsRepository):
        super().__init__()
        self.repository = repository

    async def _handle(self, update: Update, context: CallbackContext) -> int:
        try:
            energy = int(update.message.text.strip())
        except ValueError:
            await update.message.reply_text("❌ *Please send a number from 1 to 5!*", parse_mode=ParseMode.MARKDOWN)
            return ENERGY

        answers = dict(context.user_data)
        missing = [step.field for state, step in STEPS.items() if state != ENERGY and step.field not in answers]
        if missing:
            logger.warning(f"Check-in answers missing {missing}, restarting from {missing[0]}")
            return await _ask(update, next(state for state, step in STEPS.items() if step.field == missing[0]))

        metrics = DailyMetrics(
            date=dt.date.today(),
            energy_score=energy,
            mood_score=round(answers.pop("mood_score")),
            **answers,
        )
        context.user_data.clear()
        try:
            self.repository.add_daily_metrics(update.effective_user.id, metrics)
        except DuplicateMetricsError as e:
            logger.warning(str(e))
            await update.message.reply_text(
                "⚠️ *Today's check-in was already recorded* ⚠️",
                parse_mode=ParseMode.MARKDOWN,
                reply_markup=ReplyKeyboardRemove(),
            )
            return ConversationHandler.END

        await update.message.reply_text(
            "✅ *Check-in saved!* ✅\n\nUse /readiness or /recommendations to see how today looks.",
            parse_mode=ParseMode.MARKDOWN,
            reply_markup=ReplyKeyboardRemove(),
        )
        return ConversationHandler.END


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Cancels and ends the conversation."""
    logger.info(f"User {update.message.from_user.first_name} canceled the check-in.")
    context.user_data.clear()
    await update.message.reply_text(
        "⚠️ *Check-in cancelled* ⚠️\n\nYou can start again anytime with /checkin.",
        parse_mode=ParseMode.MARKDOWN,
        reply_markup=ReplyKeyboardRemove(),
    )
    return ConversationHandler.END


def get_checkin_handler(repository: MetricsRepository) -> ConversationHandler:
    states = {
        state: [MessageHandler(filters.TEXT & ~filters.COMMAND, StepHandler(state).handle)]
        for state in STEPS
        if state != ENERGY
    }
    states[ENERGY] = [MessageHandler(filters.TEXT & ~filters.COMMAND, EnergyHandler(repository).handle)]
    return ConversationHandler(
        entry_points=[CommandHandler("checkin", StartHandler(repository).handle)],
        states=states,
        fallbacks=[CommandHandler("cancel", cancel)],
    )

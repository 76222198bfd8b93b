from loguru import logger
from telegram import ReplyKeyboardMarkup, ReplyKeyboardRemove, Update
from telegram.constants import ParseMode
from telegram.ext import CallbackContext, CommandHandler, ContextTypes, ConversationHandler, MessageHandler, filters

from readiness_bot.handlers.base.private_handler import PrivateHandler
from readiness_bot.handlers.formatting import format_profile
from readiness_bot.service.health_analysis.common.data_models import Chronotype, Goal, UserProfile
from readiness_bot.service.metrics_repository import MetricsRepository

NAME, AGE, GOAL, CHRONOTYPE, FREQUENCY, SLEEP_NEED, EXAM_PHASE = range(7)
goal_reply_keyboard = [[goal.value for goal in Goal]]
chronotype_reply_keyboard = [[chronotype.value for chronotype in Chronotype]]
yes_no_reply_keyboard = [["yes", "no"]]


class StartHandler(PrivateHandler):
    async def _handle(self, update: Update, context: CallbackContext) -> int:
        context.user_data.clear()
        await update.message.reply_text(
            "👤 *PROFILE SETUP* 👤\n\nWhat should I call you?", parse_mode=ParseMode.MARKDOWN
        )
        return NAME


class NameHandler(PrivateHandler):
    async def _handle(self, update: Update, context: CallbackContext) -> int:
        name = update.message.text.strip()
        if not name:
            await update.message.reply_text("❌ *Name cannot be empty!*", parse_mode=ParseMode.MARKDOWN)
            return NAME
        context.user_data["name"] = name
        await update.message.reply_text(
            "🎂 *Age* 🎂\n\nHow old are you? (type 'n' to skip)", parse_mode=ParseMode.MARKDOWN
        )
        return AGE


class AgeHandler(PrivateHandler):
    async def _handle(self, update: Update, context: CallbackContext) -> int:
        text = update.message.text.strip()
        if text.lower() != "n":
            if not text.isdigit() or not 10 <= int(text) <= 120:
                await update.message.reply_text("❌ *Please send a valid age!*", parse_mode=ParseMode.MARKDOWN)
                return AGE
            context.user_data["age"] = int(text)

        await update.message.reply_text(
            "🎯 *Goal* 🎯\n\nWhat is your main goal?",
            reply_markup=ReplyKeyboardMarkup(
                goal_reply_keyboard, one_time_keyboard=True, input_field_placeholder="Goal"
            ),
            parse_mode=ParseMode.MARKDOWN,
        )
        return GOAL


class GoalHandler(PrivateHandler):
    async def _handle(self, update: Update, context: CallbackContext) -> int:
        try:
            context.user_data["goal"] = Goal(update.message.text.strip().lower())
        except ValueError:
            await update.message.reply_text("❌ *Please pick one of the options!*", parse_mode=ParseMode.MARKDOWN)
            return GOAL

        await update.message.reply_text(
            "🦉 *Chronotype* 🦉\n\nAre you an early bird, normal, or a night owl?",
            reply_markup=ReplyKeyboardMarkup(
                chronotype_reply_keyboard, one_time_keyboard=True, input_field_placeholder="Chronotype"
            ),
            parse_mode=ParseMode.MARKDOWN,
        )
        return CHRONOTYPE


class ChronotypeHandler(PrivateHandler):
    async def _handle(self, update: Update, context: CallbackContext) -> int:
        try:
            context.user_data["chronotype"] = Chronotype(update.message.text.strip().lower())
        except ValueError:
            await update.message.reply_text("❌ *Please pick one of the options!*", parse_mode=ParseMode.MARKDOWN)
            return CHRONOTYPE

        await update.message.reply_text(
            "🏋️ *Training* 🏋️\n\nHow many training sessions per week?",
            reply_markup=ReplyKeyboardRemove(),
            parse_mode=ParseMode.MARKDOWN,
        )
        return FREQUENCY


class FrequencyHandler(PrivateHandler):
    async def _handle(self, update: Update, context: CallbackContext) -> int:
        text = update.message.text.strip()
        if not text.isdigit() or int(text) > 14:
            await update.message.reply_text("❌ *Please send a number from 0 to 14!*", parse_mode=ParseMode.MARKDOWN)
            return FREQUENCY
        context.user_data["training_frequency"] = int(text)
        await update.message.reply_text(
            "🌙 *Sleep Need* 🌙\n\nHow many hours of sleep do you need to feel rested?", parse_mode=ParseMode.MARKDOWN
        )
        return SLEEP_NEED


class SleepNeedHandler(PrivateHandler):
    async def _handle(self, update: Update, context: CallbackContext) -> int:
        try:
            sleep_need = float(update.message.text.strip().replace(",", "."))
        except ValueError:
            sleep_need = None
        if sleep_need is None or not 4 <= sleep_need <= 12:
            await update.message.reply_text("❌ *Please send a number of hours (4-12)!*", parse_mode=ParseMode.MARKDOWN)
            return SLEEP_NEED

        context.user_data["baseline_sleep_need"] = sleep_need
        await update.message.reply_text(
            "📚 *Exam Phase* 📚\n\nAre you currently in an exam phase?",
            reply_markup=ReplyKeyboardMarkup(yes_no_reply_keyboard, one_time_keyboard=True),
            parse_mode=ParseMode.MARKDOWN,
        )
        return EXAM_PHASE


class ExamPhaseHandler(PrivateHandler):
    def __init__(self, repository: MetricsRepository):
        super().__init__()
        self.repository = repository

    async def _handle(self, update: Update, context: CallbackContext) -> int:
        answer = update.message.text.strip().lower()
        if answer not in ("yes", "no"):
            await update.message.reply_text("❌ *Please answer yes or no!*", parse_mode=ParseMode.MARKDOWN)
            return EXAM_PHASE

        profile = UserProfile(exam_phase=answer == "yes", onboarding_complete=True, **context.user_data)
        context.user_data.clear()
        self.repository.save_profile(update.effective_user.id, profile)
        await update.message.reply_text(
            f"✅ *Profile saved!* ✅\n\n{format_profile(profile)}",
            parse_mode=ParseMode.MARKDOWN,
            reply_markup=ReplyKeyboardRemove(),
        )
        return ConversationHandler.END


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Cancels and ends the conversation."""
    logger.info(f"User {update.message.from_user.first_name} canceled the profile setup.")
    context.user_data.clear()
    await update.message.reply_text(
        "⚠️ *Profile setup cancelled* ⚠️\n\nYou can start again anytime with /setup\\_profile.",
        parse_mode=ParseMode.MARKDOWN,
        reply_markup=ReplyKeyboardRemove(),
    )
    return ConversationHandler.END


def get_setup_profile_handler(repository: MetricsRepository) -> ConversationHandler:
    return ConversationHandler(
        entry_points=[CommandHandler("setup_profile", StartHandler().handle)],
        states={
            NAME: [MessageHandler(filters.TEXT & ~filters.COMMAND, NameHandler().handle)],
            AGE: [MessageHandler(filters.TEXT & ~filters.COMMAND, AgeHandler().handle)],
            GOAL: [MessageHandler(filters.TEXT & ~filters.COMMAND, GoalHandler().handle)],
            CHRONOTYPE: [MessageHandler(filters.TEXT & ~filters.COMMAND, ChronotypeHandler().handle)],
            FREQUENCY: [MessageHandler(filters.TEXT & ~filters.COMMAND, FrequencyHandler().handle)],
            SLEEP_NEED: [MessageHandler(filters.TEXT & ~filters.COMMAND, SleepNeedHandler().handle)],
            EXAM_PHASE: [MessageHandler(filters.TEXT & ~filters.COMMAND, ExamPhaseHandler(repository).handle)],
        },
        fallbacks=[CommandHandler("cancel", cancel)],
    )

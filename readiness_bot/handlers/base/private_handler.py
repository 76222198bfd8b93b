import os
from abc import ABC, abstractmethod
from typing import Any, Optional

from loguru import logger
from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import CallbackContext

from readiness_bot.service.health_analysis.common.errors import NoMetricsError


class PrivateHandler(ABC):
    """Base class for handlers that only answer the bot owner."""

    def __init__(self, owner_user_id: Optional[int] = None) -> None:
        if owner_user_id is None:
            user_id = os.getenv("MY_TELEGRAM_USER_ID")
            if user_id is None:
                raise ValueError("MY_TELEGRAM_USER_ID is not set in .env file")
            owner_user_id = int(user_id)
        self.user_id = owner_user_id

    async def handle(self, update: Update, context: CallbackContext) -> Any:
        logger.debug(
            f"Received message {update.message.text} from {update.effective_user.name}(id: {update.effective_user.id})"
        )
        if update.effective_user.id != self.user_id:
            await update.message.reply_text("⛔ This is a private health bot.")
            return
        try:
            return await self._handle(update, context)
        except NoMetricsError:
            await update.message.reply_text(
                "📭 *No metrics recorded yet*\n\nUse /checkin to log today or /seed\\_demo to load a demo history.",
                parse_mode=ParseMode.MARKDOWN,
            )
        except Exception as e:
            await update.message.reply_text(f"Exception has occurred!\n{e}")
            logger.exception(e)

    @abstractmethod
    async def _handle(self, update: Update, context: CallbackContext) -> Any:
        raise NotImplementedError

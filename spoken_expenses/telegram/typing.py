"""Telegram chat-action indicator — re-sent every N seconds until stopped."""
import asyncio
import logging

from telegram import Bot
from telegram.constants import ChatAction

from spoken_expenses.bot_client import TypingIndicator
from spoken_expenses.constants import TELEGRAM_TYPING_INTERVAL

logger = logging.getLogger(__name__)


async def _keep_acting(
    bot: Bot, chat_id: str, action: ChatAction, interval: float, stop: asyncio.Event
) -> None:
    while not stop.is_set():
        try:
            await bot.send_chat_action(chat_id=int(chat_id), action=action)
        except Exception as exc:
            logger.debug("Chat action failed: %s", exc)
        try:
            await asyncio.wait_for(stop.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass


class TelegramTypingIndicator(TypingIndicator):

    def __init__(
        self,
        bot: Bot,
        chat_id: str,
        action: ChatAction = ChatAction.TYPING,
        interval: float = TELEGRAM_TYPING_INTERVAL,
    ) -> None:
        self._bot = bot
        self._chat_id = chat_id
        self._action = action
        self._interval = interval
        self._stop_event: asyncio.Event | None = None
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        await self.stop()
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(
            _keep_acting(self._bot, self._chat_id, self._action, self._interval, self._stop_event)
        )

    async def stop(self) -> None:
        match self._stop_event:
            case None:
                pass
            case event:
                event.set()

        match self._task:
            case None:
                pass
            case task:
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
                self._task = None

        self._stop_event = None

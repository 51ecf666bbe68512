"""TelegramClient — voice notes in, rendered expense lists out."""
import logging
import time
from typing import Callable, Optional

from telegram import Bot, Update
from telegram.ext import Application, CommandHandler, ContextTypes
from telegram.ext import MessageHandler as TGMessageHandler
from telegram.ext import filters

from spoken_expenses.audio.encoder import AudioClip
from spoken_expenses.bot_client import BotClient
from spoken_expenses.config import Config
from spoken_expenses.constants import (
    CMD_STATUS,
    MSG_BLOCKED_CHAT,
    MSG_EXPENSE_FAILED,
    MSG_HELP,
    MSG_NOT_CONFIGURED,
    MSG_SEND_FAIL,
    MSG_SEND_OK,
    MSG_SEND_VOICE,
    MSG_STATUS,
    TELEGRAM_VOICE_MIME_TYPE,
)
from spoken_expenses.expenses.client import ExpenseExtractor
from spoken_expenses.render import render_expenses
from spoken_expenses.telegram.typing import TelegramTypingIndicator

logger = logging.getLogger(__name__)


def normalize_chat_id(s: str) -> str:
    return "".join(c for c in s if c.isdigit())


class TelegramClient(BotClient):

    def __init__(self, config: Config, extractor: Optional[ExpenseExtractor] = None) -> None:
        self._token = config.telegram_bot_token
        self._allowed_chat_id = config.allowed_chat_id
        self._app: Optional[Application] = None
        self._extractor = extractor

    # ── BotClient interface ───────────────────────────────────────────────────

    def run(self) -> None:
        self._app = Application.builder().token(self._token).build()
        self._app.add_handler(CommandHandler("help", self._make_reply_handler(lambda: MSG_HELP)))
        self._app.add_handler(CommandHandler("start", self._make_reply_handler(lambda: MSG_HELP)))
        self._app.add_handler(CommandHandler(CMD_STATUS, self._make_reply_handler(self.status_text)))
        self._app.add_handler(
            TGMessageHandler(filters.VOICE | filters.AUDIO, self._make_audio_handler())
        )
        self._app.add_handler(
            TGMessageHandler(filters.TEXT & ~filters.COMMAND, self._make_reply_handler(lambda: MSG_SEND_VOICE))
        )
        self._app.run_polling()

    async def send_message(self, to: str, text: str) -> bool:
        match self._app:
            case None:
                logger.error("send_message called before run()")
                return False
            case app:
                try:
                    await app.bot.send_message(chat_id=int(to), text=text)
                    return True
                except Exception as exc:
                    logger.error("Telegram send_message failed: %s", exc)
                    return False

    # ── helpers (also used in tests) ─────────────────────────────────────────

    def status_text(self) -> str:
        match self._extractor:
            case None:
                return MSG_STATUS % ("(none)", "(none)")
            case extractor:
                return MSG_STATUS % (extractor.name, extractor.model)

    def _is_allowed(self, update: Update) -> bool:
        if update.effective_chat is None:
            return False
        incoming = normalize_chat_id(str(update.effective_chat.id))
        allowed = normalize_chat_id(self._allowed_chat_id)
        return incoming == allowed

    @staticmethod
    def _audio_attachment(update: Update):
        """Voice note or audio file on the message, with its MIME type."""
        message = update.message
        match message:
            case None:
                return None, ""
            case _:
                pass
        match (message.voice, message.audio):
            case (None, None):
                return None, ""
            case (None, audio):
                return audio, audio.mime_type or ""
            case (voice, _):
                return voice, voice.mime_type or TELEGRAM_VOICE_MIME_TYPE

    # ── internal handler factory ──────────────────────────────────────────────

    def _make_reply_handler(self, callback: Callable[[], str]) -> Callable:
        """Handler that answers an allowed chat with callback()."""
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            match self._is_allowed(update):
                case False:
                    chat_id = update.effective_chat.id if update.effective_chat else "?"
                    logger.warning(MSG_BLOCKED_CHAT, chat_id)
                    return
                case True:
                    pass
            sender = str(update.effective_chat.id)
            await self.send_message(sender, callback())

        return _handler

    def _make_audio_handler(self) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            match self._is_allowed(update):
                case False:
                    chat_id = update.effective_chat.id if update.effective_chat else "?"
                    logger.warning(MSG_BLOCKED_CHAT, chat_id)
                    return
                case True:
                    pass

            sender = str(update.effective_chat.id)
            match self._extractor:
                case None:
                    await self.send_message(sender, MSG_NOT_CONFIGURED)
                    return
                case _:
                    pass

            attachment, mime_type = self._audio_attachment(update)
            match attachment:
                case None:
                    return
                case a:
                    await self._process(sender, a, mime_type, context.bot)

        return _handler

    async def _process(self, sender: str, attachment, mime_type: str, bot: Bot) -> None:
        start = time.time()
        typing = TelegramTypingIndicator(bot, sender)
        await typing.start()
        try:
            tg_file = await attachment.get_file()
            audio_bytes = bytes(await tg_file.download_as_bytearray())
            clip = AudioClip(data=audio_bytes, mime_type=mime_type) if mime_type else AudioClip(data=audio_bytes)
            reply = render_expenses(await self._extractor.process_audio(clip))
        except Exception:
            logger.exception("Expense extraction failed")
            reply = MSG_EXPENSE_FAILED
        finally:
            await typing.stop()

        elapsed = time.time() - start
        success = await self.send_message(sender, reply)
        match success:
            case True:
                logger.info(MSG_SEND_OK, elapsed)
            case False:
                logger.error(MSG_SEND_FAIL, elapsed)

"""TDD: TelegramClient tests written FIRST"""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from spoken_expenses.config import Config
from spoken_expenses.constants import (
    MSG_BLOCKED_CHAT,
    MSG_EXPENSE_FAILED,
    MSG_HELP,
    MSG_NOT_CONFIGURED,
    MSG_SEND_VOICE,
)
from spoken_expenses.expenses.client import ExpenseExtractor
from spoken_expenses.expenses.models import ExpenseItem, ExpenseResponse
from spoken_expenses.telegram.client import TelegramClient, normalize_chat_id

RESULT = ExpenseResponse(
    transcription="दो सौ का आलू",
    translation="Potatoes for 200",
    expenses=(ExpenseItem(item="Potatoes", amount=200, category="Food"),),
    total_amount=200,
    currency="INR",
)


def make_config(*, token: str = "test-token", chat_id: str = "123456789") -> Config:
    return Config(
        telegram_bot_token=token,
        allowed_chat_id=chat_id,
        log_level="INFO",
        expense_provider="gemini",
        gemini_api_key="key",
        gemini_model="gemini-2.5-flash",
        openai_api_key=None,
        request_timeout=60.0,
    )


def make_extractor(**kwargs) -> MagicMock:
    extractor = MagicMock(spec=ExpenseExtractor)
    extractor.name = "Gemini"
    extractor.model = "gemini-2.5-flash"
    extractor.process_audio = AsyncMock(**kwargs)
    return extractor


def make_voice_update(*, chat_id: int = 123456789, voice_mime: str | None = "audio/ogg", audio=None) -> MagicMock:
    """Build a minimal mock of a python-telegram-bot Update carrying a voice note."""
    update = MagicMock()
    update.effective_chat.id = chat_id
    tg_file = MagicMock()
    tg_file.download_as_bytearray = AsyncMock(return_value=bytearray(b"ogg-bytes"))
    match voice_mime:
        case None:
            update.message.voice = None
        case mime:
            update.message.voice.mime_type = mime
            update.message.voice.get_file = AsyncMock(return_value=tg_file)
    match audio:
        case None:
            update.message.audio = None
        case a:
            a.get_file = AsyncMock(return_value=tg_file)
            update.message.audio = a
    return update


@pytest.fixture
def no_typing():
    with patch("spoken_expenses.telegram.client.TelegramTypingIndicator") as cls:
        indicator = MagicMock()
        indicator.start = AsyncMock()
        indicator.stop = AsyncMock()
        cls.return_value = indicator
        yield indicator


# ── allowed-chat filter ───────────────────────────────────────────────────────


def test_normalize_chat_id_keeps_digits():
    assert normalize_chat_id("-100123") == "100123"


def test_allowed_chat_id_passes_filter():
    client = TelegramClient(make_config(chat_id="123456789"))
    assert client._is_allowed(make_voice_update(chat_id=123456789))


def test_blocked_chat_id_fails_filter():
    client = TelegramClient(make_config(chat_id="123456789"))
    assert not client._is_allowed(make_voice_update(chat_id=999999999))


def test_update_without_chat_fails_filter():
    update = MagicMock()
    update.effective_chat = None
    assert not TelegramClient(make_config())._is_allowed(update)


# ── attachment detection ──────────────────────────────────────────────────────


def test_voice_attachment_uses_voice_mime():
    update = make_voice_update(voice_mime="audio/ogg")
    attachment, mime = TelegramClient._audio_attachment(update)
    assert attachment is update.message.voice
    assert mime == "audio/ogg"


def test_voice_without_mime_defaults_to_ogg():
    update = make_voice_update(voice_mime="")
    _, mime = TelegramClient._audio_attachment(update)
    assert mime == "audio/ogg"


def test_audio_file_attachment():
    audio = MagicMock()
    audio.mime_type = "audio/mpeg"
    update = make_voice_update(voice_mime=None, audio=audio)

    attachment, mime = TelegramClient._audio_attachment(update)

    assert attachment is audio
    assert mime == "audio/mpeg"


def test_no_attachment():
    update = make_voice_update(voice_mime=None)
    assert TelegramClient._audio_attachment(update) == (None, "")


# ── audio handler ─────────────────────────────────────────────────────────────


async def test_voice_replies_not_configured_without_extractor():
    client = TelegramClient(make_config())

    with patch.object(client, "send_message", new_callable=AsyncMock) as mock_send:
        await client._make_audio_handler()(make_voice_update(), MagicMock())

    mock_send.assert_called_once_with("123456789", MSG_NOT_CONFIGURED)


async def test_voice_from_blocked_chat_is_ignored(caplog):
    extractor = make_extractor(return_value=RESULT)
    client = TelegramClient(make_config(), extractor=extractor)

    with patch.object(client, "send_message", new_callable=AsyncMock) as mock_send:
        with caplog.at_level("WARNING"):
            await client._make_audio_handler()(make_voice_update(chat_id=42), MagicMock())

    mock_send.assert_not_called()
    extractor.process_audio.assert_not_called()
    assert any(r.msg == MSG_BLOCKED_CHAT for r in caplog.records)


async def test_voice_is_extracted_and_rendered(no_typing):
    extractor = make_extractor(return_value=RESULT)
    client = TelegramClient(make_config(), extractor=extractor)

    with patch.object(client, "send_message", new_callable=AsyncMock, return_value=True) as mock_send:
        await client._make_audio_handler()(make_voice_update(), MagicMock())

    clip = extractor.process_audio.await_args.args[0]
    assert clip.data == b"ogg-bytes"
    assert clip.mime_type == "audio/ogg"

    sender, reply = mock_send.await_args.args
    assert sender == "123456789"
    assert "Potatoes" in reply
    assert "Total: 200" in reply
    no_typing.start.assert_awaited_once()
    no_typing.stop.assert_awaited_once()


async def test_extraction_failure_replies_with_apology(no_typing):
    extractor = make_extractor(side_effect=RuntimeError("model down"))
    client = TelegramClient(make_config(), extractor=extractor)

    with patch.object(client, "send_message", new_callable=AsyncMock, return_value=True) as mock_send:
        await client._make_audio_handler()(make_voice_update(), MagicMock())

    mock_send.assert_awaited_once_with("123456789", MSG_EXPENSE_FAILED)
    no_typing.stop.assert_awaited_once()


async def test_audio_file_without_mime_uses_default_clip_type(no_typing):
    audio = MagicMock()
    audio.mime_type = None
    extractor = make_extractor(return_value=RESULT)
    client = TelegramClient(make_config(), extractor=extractor)

    with patch.object(client, "send_message", new_callable=AsyncMock, return_value=True):
        await client._make_audio_handler()(make_voice_update(voice_mime=None, audio=audio), MagicMock())

    assert extractor.process_audio.await_args.args[0].mime_type == "audio/webm"


# ── text / commands ───────────────────────────────────────────────────────────


async def test_text_message_gets_usage_hint():
    client = TelegramClient(make_config())
    update = make_voice_update()

    with patch.object(client, "send_message", new_callable=AsyncMock) as mock_send:
        await client._make_reply_handler(lambda: MSG_SEND_VOICE)(update, MagicMock())

    mock_send.assert_called_once_with("123456789", MSG_SEND_VOICE)


def test_status_text_names_provider_and_model():
    client = TelegramClient(make_config(), extractor=make_extractor())
    status = client.status_text()
    assert "Gemini" in status
    assert "gemini-2.5-flash" in status


def test_status_text_without_extractor():
    assert "(none)" in TelegramClient(make_config()).status_text()


async def test_send_message_before_run_fails():
    client = TelegramClient(make_config())
    assert await client.send_message("123456789", "hi") is False


def test_help_text_mentions_voice_notes():
    assert "Voice note" in MSG_HELP
    assert "/status" in MSG_HELP

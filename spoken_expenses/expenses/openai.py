"""OpenAIExpenseExtractor — Whisper transcription + GPT-4o structured extraction."""
import io
import logging
import mimetypes
from typing import Optional

from openai import AsyncOpenAI

from spoken_expenses.audio.encoder import AudioClip
from spoken_expenses.constants import (
    EXTRACTION_TEMPERATURE,
    MSG_ATTEMPT_FAILED,
    MSG_EMPTY_RESPONSE,
    MSG_EXTRACTED,
    OPENAI_EXTRACTION_MODEL,
    OPENAI_SCHEMA_NAME,
    SYSTEM_INSTRUCTION,
    TRANSCRIPT_PROMPT,
    WHISPER_MODEL,
)
from spoken_expenses.errors import EmptyResponseError
from spoken_expenses.expenses.client import ExpenseExtractor
from spoken_expenses.expenses.models import ExpenseResponse, parse_expense_response
from spoken_expenses.expenses.retry import Sleep, retry_with_backoff
from spoken_expenses.expenses.schema import RESPONSE_SCHEMA, to_json_schema

logger = logging.getLogger(__name__)

# Whisper picks the decoder from the upload's file extension.
_EXTENSION_OVERRIDES = {"audio/webm": ".webm", "audio/ogg": ".ogg", "audio/mpeg": ".mp3"}


def audio_filename(mime_type: str) -> str:
    ext = _EXTENSION_OVERRIDES.get(mime_type) or mimetypes.guess_extension(mime_type) or ".webm"
    return f"audio{ext}"


class OpenAIExpenseExtractor(ExpenseExtractor):
    name = "OpenAI"

    def __init__(
        self,
        api_key: str,
        model: str = OPENAI_EXTRACTION_MODEL,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self._api_key = api_key
        self.model = model
        self._sleep = sleep

    async def process_audio(self, audio: AudioClip) -> ExpenseResponse:
        async def _attempt() -> ExpenseResponse:
            try:
                return await self._extract(audio)
            except Exception as exc:
                logger.error(MSG_ATTEMPT_FAILED, self.name, exc)
                raise

        retry_kwargs = {"sleep": self._sleep} if self._sleep else {}
        result = await retry_with_backoff(_attempt, **retry_kwargs)
        logger.info(MSG_EXTRACTED, len(result.expenses), result.total_amount, result.currency)
        return result

    async def _extract(self, audio: AudioClip) -> ExpenseResponse:
        audio_file = io.BytesIO(audio.data)
        audio_file.name = audio_filename(audio.mime_type)
        async with AsyncOpenAI(api_key=self._api_key) as client:
            transcript = await client.audio.transcriptions.create(
                model=WHISPER_MODEL,
                file=audio_file,
            )
            response = await client.chat.completions.create(
                model=self.model,
                temperature=EXTRACTION_TEMPERATURE,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": OPENAI_SCHEMA_NAME,
                        "schema": to_json_schema(RESPONSE_SCHEMA),
                        "strict": True,
                    },
                },
                messages=[
                    {"role": "system", "content": SYSTEM_INSTRUCTION},
                    {"role": "user", "content": TRANSCRIPT_PROMPT % transcript.text.strip()},
                ],
            )
        content = response.choices[0].message.content
        match content:
            case None | "":
                raise EmptyResponseError(MSG_EMPTY_RESPONSE % self.name)
            case text:
                return parse_expense_response(text)

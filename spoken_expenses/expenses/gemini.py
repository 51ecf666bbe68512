"""GeminiExpenseExtractor — Gemini generateContent backend over REST."""
import logging
from typing import Any, Optional

import httpx

from spoken_expenses.audio.encoder import AudioClip, encode_audio
from spoken_expenses.constants import (
    ANALYZE_PROMPT,
    DEFAULT_AUDIO_MIME_TYPE,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_REQUEST_TIMEOUT,
    EXTRACTION_TEMPERATURE,
    GEMINI_API_BASE,
    GEMINI_API_KEY_HEADER,
    MSG_ATTEMPT_FAILED,
    MSG_EMPTY_RESPONSE,
    MSG_EXTRACTED,
    RESPONSE_MIME_TYPE,
    SYSTEM_INSTRUCTION,
)
from spoken_expenses.errors import EmptyResponseError, ModelAPIError
from spoken_expenses.expenses.client import ExpenseExtractor
from spoken_expenses.expenses.models import ExpenseResponse, parse_expense_response
from spoken_expenses.expenses.retry import Sleep, retry_with_backoff
from spoken_expenses.expenses.schema import RESPONSE_SCHEMA, SAFETY_SETTINGS

logger = logging.getLogger(__name__)


def build_request(audio_b64: str, mime_type: str) -> dict[str, Any]:
    """generateContent body: inline audio, instruction, schema, sampling and safety."""
    return {
        "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
        "contents": [
            {
                "role": "user",
                "parts": [
                    {
                        "inlineData": {
                            "mimeType": mime_type or DEFAULT_AUDIO_MIME_TYPE,
                            "data": audio_b64,
                        }
                    },
                    {"text": ANALYZE_PROMPT},
                ],
            }
        ],
        "generationConfig": {
            "responseMimeType": RESPONSE_MIME_TYPE,
            "responseSchema": RESPONSE_SCHEMA,
            "temperature": EXTRACTION_TEMPERATURE,
        },
        "safetySettings": SAFETY_SETTINGS,
    }


def response_text(payload: dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate ('' when there are none)."""
    candidates = payload.get("candidates") or []
    match candidates:
        case []:
            return ""
        case [first, *_]:
            parts = (first.get("content") or {}).get("parts") or []
            return "".join(part.get("text") or "" for part in parts)


class GeminiExpenseExtractor(ExpenseExtractor):
    name = "Gemini"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self._api_key = api_key
        self.model = model
        self._timeout = timeout
        self._transport = transport
        self._sleep = sleep

    @property
    def endpoint(self) -> str:
        return f"{GEMINI_API_BASE}/models/{self.model}:generateContent"

    async def process_audio(self, audio: AudioClip) -> ExpenseResponse:
        audio_b64 = encode_audio(audio)
        body = build_request(audio_b64, audio.mime_type)

        async def _attempt() -> ExpenseResponse:
            try:
                return await self._generate(body)
            except Exception as exc:
                logger.error(MSG_ATTEMPT_FAILED, self.name, exc)
                raise

        retry_kwargs = {"sleep": self._sleep} if self._sleep else {}
        result = await retry_with_backoff(_attempt, **retry_kwargs)
        logger.info(MSG_EXTRACTED, len(result.expenses), result.total_amount, result.currency)
        return result

    async def _generate(self, body: dict[str, Any]) -> ExpenseResponse:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(
                self.endpoint,
                headers={GEMINI_API_KEY_HEADER: self._api_key},
                json=body,
            )

        if response.is_error:
            raise ModelAPIError(
                f"Gemini API returned {response.status_code}",
                status_code=response.status_code,
                response_body=response.text,
            )

        match response_text(response.json()):
            case "":
                raise EmptyResponseError(MSG_EMPTY_RESPONSE % self.name)
            case text:
                return parse_expense_response(text)

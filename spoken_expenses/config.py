from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from spoken_expenses.constants import (
    DEFAULT_GEMINI_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_REQUEST_TIMEOUT,
)


@dataclass(frozen=True)
class Config:
    telegram_bot_token: str
    allowed_chat_id: str
    log_level: str
    expense_provider: str
    gemini_api_key: Optional[str]
    gemini_model: str
    openai_api_key: Optional[str]
    request_timeout: float

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        token = os.getenv("TELEGRAM_BOT_TOKEN")
        chat_id = os.getenv("ALLOWED_CHAT_ID")
        log_level = os.getenv("LOG_LEVEL", "INFO")
        provider = os.getenv("EXPENSE_PROVIDER", DEFAULT_PROVIDER)
        gemini_api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None
        gemini_model = os.getenv("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL
        openai_api_key = os.getenv("OPENAI_API_KEY") or None
        request_timeout = os.getenv("REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))

        return cls._validate(
            telegram_bot_token=token,
            allowed_chat_id=chat_id,
            log_level=log_level,
            expense_provider=provider.strip().lower(),
            gemini_api_key=gemini_api_key,
            gemini_model=gemini_model,
            openai_api_key=openai_api_key,
            request_timeout=float(request_timeout),
        )

    @staticmethod
    def _validate(
        telegram_bot_token: Optional[str],
        allowed_chat_id: Optional[str],
        log_level: str,
        expense_provider: str,
        gemini_api_key: Optional[str],
        gemini_model: str,
        openai_api_key: Optional[str],
        request_timeout: float,
    ) -> "Config":
        match telegram_bot_token:
            case None | "":
                raise ValueError("TELEGRAM_BOT_TOKEN must be set in .env")
            case _:
                pass

        match allowed_chat_id:
            case None | "":
                raise ValueError("ALLOWED_CHAT_ID must be set in .env")
            case _:
                pass

        match request_timeout:
            case t if t <= 0:
                raise ValueError("REQUEST_TIMEOUT must be positive")
            case _:
                pass

        return Config(
            telegram_bot_token=telegram_bot_token,
            allowed_chat_id=allowed_chat_id,
            log_level=log_level,
            expense_provider=expense_provider,
            gemini_api_key=gemini_api_key,
            gemini_model=gemini_model,
            openai_api_key=openai_api_key,
            request_timeout=request_timeout,
        )

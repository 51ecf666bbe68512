from spoken_expenses.config import Config
from spoken_expenses.constants import PROVIDER_GEMINI, PROVIDER_OPENAI
from spoken_expenses.expenses.client import ExpenseExtractor
from spoken_expenses.expenses.gemini import GeminiExpenseExtractor
from spoken_expenses.expenses.openai import OpenAIExpenseExtractor


def build_extractor(config: Config) -> ExpenseExtractor:
    """Return the configured expense extraction backend."""
    match config.expense_provider:
        case provider if provider == PROVIDER_GEMINI:
            return GeminiExpenseExtractor(
                config.gemini_api_key or "",
                model=config.gemini_model,
                timeout=config.request_timeout,
            )
        case provider if provider == PROVIDER_OPENAI:
            return OpenAIExpenseExtractor(config.openai_api_key or "")
        case provider:
            raise ValueError(f"Unknown expense provider: {provider}")

"""Response schema for the expense reply, plus its OpenAI JSON-schema form."""
from typing import Any

from spoken_expenses.constants import SAFETY_CATEGORIES, SAFETY_THRESHOLD

EXPENSE_ITEM_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "item": {"type": "STRING", "description": "The name of the item purchased."},
        "amount": {
            "type": "NUMBER",
            "description": "The cost of the item. Resolve words like 'lakh', 'hazar' to numbers.",
        },
        "category": {
            "type": "STRING",
            "description": "Category of the expense (e.g., Food, Electronics, Transport).",
        },
    },
    "required": ["item", "amount", "category"],
}

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "transcription": {
            "type": "STRING",
            "description": "The exact Hindi or English transcription of the audio.",
        },
        "translation": {
            "type": "STRING",
            "description": "The English translation of the transcription.",
        },
        "expenses": {"type": "ARRAY", "items": EXPENSE_ITEM_SCHEMA},
        "totalAmount": {
            "type": "NUMBER",
            "description": "The sum of all expense amounts detected.",
        },
        "currency": {
            "type": "STRING",
            "description": "The currency detected (e.g., INR, USD).",
        },
    },
    "required": ["transcription", "translation", "expenses", "totalAmount", "currency"],
}

SAFETY_SETTINGS: list[dict[str, str]] = [
    {"category": category, "threshold": SAFETY_THRESHOLD} for category in SAFETY_CATEGORIES
]


def to_json_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Gemini schema → strict JSON Schema (lowercase types, closed objects)."""
    converted: dict[str, Any] = {
        key: value
        for key, value in schema.items()
        if key not in ("type", "properties", "items")
    }
    converted["type"] = schema["type"].lower()
    match schema["type"]:
        case "OBJECT":
            converted["properties"] = {
                name: to_json_schema(prop) for name, prop in schema["properties"].items()
            }
            converted["required"] = list(schema["properties"])
            converted["additionalProperties"] = False
        case "ARRAY":
            converted["items"] = to_json_schema(schema["items"])
        case _:
            pass
    return converted

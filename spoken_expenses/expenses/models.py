"""Expense records and the parser that turns a model reply into them."""
import json
import math
from dataclasses import dataclass
from typing import Any

from spoken_expenses.errors import ResponseParseError

JSON_FENCE = "```json"
FENCE = "```"


@dataclass(frozen=True)
class ExpenseItem:
    item: str
    amount: float
    category: str


@dataclass(frozen=True)
class ExpenseResponse:
    transcription: str
    translation: str
    expenses: tuple[ExpenseItem, ...]
    total_amount: float
    currency: str

    @property
    def items_total(self) -> float:
        """Sum of item amounts. Informational: total_amount is never recomputed."""
        return sum(map(lambda e: e.amount, self.expenses))

    @classmethod
    def from_dict(cls, raw: Any) -> "ExpenseResponse":
        match raw:
            case dict():
                pass
            case _:
                raise ResponseParseError(f"Expected a JSON object, got {type(raw).__name__}")
        expenses = _require(raw, "expenses", list)
        return cls(
            transcription=_require(raw, "transcription", str),
            translation=_require(raw, "translation", str),
            expenses=tuple(map(_item_from_dict, expenses)),
            total_amount=_number(raw, "totalAmount"),
            currency=_require(raw, "currency", str),
        )


def _require(raw: dict, key: str, kind: type) -> Any:
    match raw.get(key):
        case None:
            raise ResponseParseError(f"Missing field: {key}")
        case value if isinstance(value, kind):
            return value
        case value:
            raise ResponseParseError(f"Field {key} must be {kind.__name__}, got {type(value).__name__}")


def _number(raw: dict, key: str) -> float:
    match raw.get(key):
        case None:
            raise ResponseParseError(f"Missing field: {key}")
        case bool():
            raise ResponseParseError(f"Field {key} must be a number")
        case int() | float() as value:
            return _finite(key, value)
        case _:
            raise ResponseParseError(f"Field {key} must be a number")


def _finite(key: str, value: int | float) -> float:
    try:
        number = float(value)
    except OverflowError as exc:
        raise ResponseParseError(f"Field {key} is out of range") from exc
    match math.isfinite(number):
        case True:
            return number
        case False:
            raise ResponseParseError(f"Field {key} must be a finite number")


def _item_from_dict(raw: Any) -> ExpenseItem:
    match raw:
        case dict():
            return ExpenseItem(
                item=_require(raw, "item", str),
                amount=_number(raw, "amount"),
                category=_require(raw, "category", str),
            )
        case _:
            raise ResponseParseError(f"Expense entry must be an object, got {type(raw).__name__}")


def clean_response_text(text: str) -> str:
    """Strip a surrounding ```json … ``` (or bare ```) fence from model output."""
    clean = text.strip()
    match clean:
        case c if c.startswith(JSON_FENCE):
            clean = c[len(JSON_FENCE):]
        case c if c.startswith(FENCE):
            clean = c[len(FENCE):]
        case _:
            return clean
    if clean.endswith(FENCE):
        clean = clean[: -len(FENCE)]
    return clean.strip()


def parse_expense_response(text: str) -> ExpenseResponse:
    """Clean and parse a model reply. Raises ResponseParseError on bad input."""
    try:
        raw = json.loads(clean_response_text(text))
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"Model reply is not valid JSON: {exc}") from exc
    return ExpenseResponse.from_dict(raw)

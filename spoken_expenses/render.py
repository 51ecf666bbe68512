"""Render an ExpenseResponse as a chat reply."""
from spoken_expenses.constants import (
    MSG_EXPENSE_LINE,
    MSG_EXPENSES_HEADER,
    MSG_HEARD,
    MSG_NO_EXPENSES,
    MSG_TOTAL_LINE,
    MSG_TOTAL_MISMATCH,
    MSG_TRANSLATION,
)
from spoken_expenses.expenses.models import ExpenseItem, ExpenseResponse

INDIAN_GROUPING_CURRENCIES = ("INR",)
TOTAL_TOLERANCE = 0.005


def _group_indian(digits: str) -> str:
    """'10000000' → '1,00,00,000': last three digits, then pairs."""
    match len(digits):
        case n if n <= 3:
            return digits
        case _:
            head, tail = digits[:-3], digits[-3:]
            pairs = [head[max(i - 2, 0):i] for i in range(len(head), 0, -2)]
            return ",".join(reversed(pairs)) + "," + tail


def format_amount(value: float, currency: str = "") -> str:
    rounded = f"{abs(value):.2f}"
    sign = "-" if value < 0 and rounded.strip("0.") else ""
    whole, _, fraction = rounded.partition(".")
    grouped = (
        _group_indian(whole)
        if currency.upper() in INDIAN_GROUPING_CURRENCIES
        else f"{int(whole):,}"
    )
    match fraction:
        case "00":
            return f"{sign}{grouped}"
        case _:
            return f"{sign}{grouped}.{fraction}"


def _line(expense: ExpenseItem, currency: str) -> str:
    return MSG_EXPENSE_LINE % (expense.item, format_amount(expense.amount, currency), expense.category)


def render_expenses(response: ExpenseResponse) -> str:
    currency = response.currency
    lines = [MSG_EXPENSES_HEADER % (currency or "?")]
    match response.expenses:
        case ():
            lines.append(MSG_NO_EXPENSES)
        case expenses:
            lines.extend(map(lambda e: _line(e, currency), expenses))

    total = format_amount(response.total_amount, currency)
    match abs(response.total_amount - response.items_total) > TOTAL_TOLERANCE:
        case True:
            lines.append(MSG_TOTAL_MISMATCH % (total, format_amount(response.items_total, currency)))
        case False:
            lines.append(MSG_TOTAL_LINE % total)

    lines.append("")
    lines.append(MSG_HEARD % response.transcription.strip())
    if response.translation.strip() and response.translation.strip() != response.transcription.strip():
        lines.append(MSG_TRANSLATION % response.translation.strip())
    return "\n".join(lines)

"""TDD: expense rendering tests written FIRST"""
from spoken_expenses.expenses.models import ExpenseItem, ExpenseResponse
from spoken_expenses.render import format_amount, render_expenses


def make_response(expenses, total, currency="INR", transcription="ek lakh ka laptop", translation="A laptop for one lakh"):
    return ExpenseResponse(
        transcription=transcription,
        translation=translation,
        expenses=tuple(expenses),
        total_amount=total,
        currency=currency,
    )


# ── amounts ───────────────────────────────────────────────────────────────────


def test_inr_uses_indian_grouping():
    assert format_amount(100000, "INR") == "1,00,000"
    assert format_amount(15000000, "inr") == "1,50,00,000"


def test_small_amounts_are_ungrouped():
    assert format_amount(200, "INR") == "200"


def test_other_currencies_use_thousands_grouping():
    assert format_amount(100000, "USD") == "100,000"


def test_fractional_amounts_keep_two_decimals():
    assert format_amount(1234.5, "INR") == "1,234.50"


def test_negative_amount():
    assert format_amount(-2500, "INR") == "-2,500"


# ── reply text ────────────────────────────────────────────────────────────────


def test_render_lists_items_and_total():
    response = make_response(
        [
            ExpenseItem(item="Laptop", amount=100000, category="Electronics"),
            ExpenseItem(item="Potatoes", amount=200, category="Food"),
        ],
        100200,
    )

    text = render_expenses(response)

    assert text.splitlines()[0] == "Expenses (INR)"
    assert "• Laptop: 1,00,000 [Electronics]" in text
    assert "• Potatoes: 200 [Food]" in text
    assert "Total: 1,00,200" in text
    assert "Heard: ek lakh ka laptop" in text
    assert "English: A laptop for one lakh" in text


def test_render_empty_expenses():
    text = render_expenses(make_response([], 0))

    assert "No expenses found" in text
    assert "Total: 0" in text


def test_render_keeps_model_total_and_notes_mismatch():
    response = make_response([ExpenseItem(item="Tea", amount=20, category="Food")], 25)

    text = render_expenses(response)

    assert "Total: 25 (items add up to 20)" in text


def test_render_skips_translation_identical_to_transcription():
    response = make_response([], 0, transcription="200 for petrol", translation="200 for petrol")

    assert "English:" not in render_expenses(response)


def test_render_unknown_currency():
    assert render_expenses(make_response([], 0, currency="")).startswith("Expenses (?)")


def test_amount_rounding_to_zero_has_no_sign():
    assert format_amount(-0.001, "USD") == "0"
    assert format_amount(-0.001, "INR") == "0"


def test_small_negative_fraction_keeps_sign():
    assert format_amount(-0.5, "USD") == "-0.50"

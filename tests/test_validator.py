from decimal import Decimal

import pytest

from app.modules.ledger.models import RejectedTransaction, Transaction, TransactionType
from app.modules.ledger.validator import RawRow, parse_amount, validate_row


def test_valid_row_becomes_transaction():
    result = validate_row(["Alice", "1111", "100", "Credit", "salary", ""], 1)
    assert isinstance(result, Transaction)
    assert result.account_name == "Alice"
    assert result.account_id == "Alice_1111"
    assert result.amount == Decimal("100")
    assert result.type is TransactionType.CREDIT
    assert result.description == "salary"
    assert result.target_card_number is None


def test_account_id_collapses_whitespace_and_trims_card():
    result = validate_row(["Jane Doe", " 4111 ", "10"], 1)
    assert isinstance(result, Transaction)
    assert result.account_id == "Jane_Doe_4111"
    assert result.card_number == "4111"

    spaced = validate_row(["  Jane \t  Doe ", "4111", "10"], 1)
    assert spaced.account_id == "Jane_Doe_4111"


@pytest.mark.parametrize("raw", ["credit", "CREDIT", "Credit", " cReDiT "])
def test_type_is_case_insensitive(raw):
    assert validate_row(["Alice", "1111", "1", raw], 1).type is TransactionType.CREDIT


@pytest.mark.parametrize("fields", [["Alice", "1111", "1"], ["Alice", "1111", "1", ""], ["Alice", "1111", "1", "Refund"]])
def test_missing_or_unknown_type_becomes_unknown(fields):
    result = validate_row(fields, 1)
    assert isinstance(result, Transaction)
    assert result.type is TransactionType.UNKNOWN


def test_transfer_keeps_target_card_without_cross_checks():
    transfer = validate_row(["Alice", "1111", "-20", "transfer", "", "2222"], 1)
    assert transfer.type is TransactionType.TRANSFER
    assert transfer.target_card_number == "2222"

    debit = validate_row(["Alice", "1111", "-20", "Debit", "", "3333"], 1)
    assert debit.target_card_number == "3333"


def test_collects_every_violation():
    result = validate_row(["", "", "abc", "Credit"], 7)
    assert isinstance(result, RejectedTransaction)
    assert result.row == 7
    assert len(result.reasons) == 3
    assert "Account Name" in result.error
    assert "Card Number" in result.error
    assert '"Amount" must be a number' in result.error
    assert result.error == ", ".join(result.reasons)


def test_rejection_uses_display_defaults():
    result = validate_row(["Alice"], 3)
    assert isinstance(result, RejectedTransaction)
    assert result.reasons == ('"Card Number" is required', '"Amount" is required')
    assert result.account_name == "Alice"
    assert result.card_number == "Unknown"
    assert result.account_id == "No ID"
    assert result.transaction_amount == "0"
    assert result.description == "No Description"
    assert result.type == "Unknown"
    assert result.raw_data["accountName"] == "Alice"
    assert result.raw_data["amount"] is None


def test_rejection_keeps_account_id_when_identity_is_known():
    result = validate_row(["Jane Doe", "4111", "ten", "Debit", "lunch"], 2)
    assert isinstance(result, RejectedTransaction)
    assert result.account_id == "Jane_Doe_4111"
    assert result.type == "Debit"
    assert result.description == "lunch"
    assert result.transaction_amount == "ten"


@pytest.mark.parametrize("amount", ["NaN", "Infinity", "-inf", "1,000", "12abc", "   "])
def test_non_numeric_amounts_are_rejected(amount):
    assert isinstance(validate_row(["Alice", "1111", amount], 1), RejectedTransaction)


def test_whitespace_only_required_fields_are_empty():
    result = validate_row(["   ", "1111", "1"], 1)
    assert isinstance(result, RejectedTransaction)
    assert result.reasons == ('"Account Name" is not allowed to be empty',)
    assert result.account_name == "Unknown"


@pytest.mark.parametrize(
    "fields",
    [[], ["Alice"], ["Alice", "1111"], ["Alice", "1111", "5"], ["", "1111", "5"], ["Alice", "1111", "x", "Debit"]],
)
def test_every_row_has_exactly_one_outcome(fields):
    result = validate_row(fields, 1)
    assert isinstance(result, Transaction) != isinstance(result, RejectedTransaction)


def test_raw_row_pads_and_truncates():
    assert RawRow.from_fields(["a"]) == RawRow("a", None, None, None, None, None)
    assert RawRow.from_fields(["a", "b", "c", "d", "e", "f", "g"]).target_card_number == "f"


def test_parse_amount():
    assert parse_amount(" -30.50 ") == Decimal("-30.50")
    assert parse_amount("1e3") == Decimal("1000")
    assert parse_amount("") is None
    assert parse_amount(None) is None


@pytest.mark.parametrize(
    "amount",
    [
        "1e999999999",
        "-1E+28",
        "1e-29",
        "12345678901234567890123456789.99",
        "1_000",
    ],
)
def test_out_of_range_amounts_are_rejected(amount):
    result = validate_row(["Alice", "1111", amount], 1)
    assert isinstance(result, RejectedTransaction)
    assert result.reasons == ('"Amount" must be a number',)
    assert result.transaction_amount == amount


def test_amount_limits_are_inclusive():
    assert parse_amount("9" * 28) == Decimal("9" * 28)
    assert parse_amount("0." + "0" * 27 + "1") == Decimal("1e-28")
    assert parse_amount("1e27") == Decimal("1e27")

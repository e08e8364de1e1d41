"""Row validation: map one raw CSV row to a transaction or a rejection."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import List, NamedTuple, Optional, Sequence, Union

from .models import (
    NO_DESCRIPTION,
    NO_ID,
    UNKNOWN,
    RejectedTransaction,
    Transaction,
    TransactionType,
    derive_account_id,
)
from .parser import COLUMNS

LABELS = {
    "accountName": "Account Name",
    "cardNumber": "Card Number",
    "amount": "Amount",
    "type": "Transaction Type",
    "description": "Description",
    "targetCardNumber": "Target Card Number",
}

# Same as the default decimal context precision.
MAX_AMOUNT_DIGITS = 28


class RawRow(NamedTuple):
    """Fixed-arity view of a CSV row; field ``i`` is column ``COLUMNS[i]``."""

    account_name: Optional[str]
    card_number: Optional[str]
    amount: Optional[str]
    type: Optional[str]
    description: Optional[str]
    target_card_number: Optional[str]

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "RawRow":
        values: List[Optional[str]] = list(fields[: len(COLUMNS)])
        values.extend([None] * (len(COLUMNS) - len(values)))
        return cls(*values)

    def as_mapping(self) -> dict[str, Optional[str]]:
        return dict(zip(COLUMNS, self))


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _optional(value: Optional[str]) -> Optional[str]:
    if _blank(value):
        return None
    return value


def _required_message(field: str, value: Optional[str]) -> str:
    if value is None:
        return f'"{LABELS[field]}" is required'
    return f'"{LABELS[field]}" is not allowed to be empty'


def parse_amount(raw: Optional[str]) -> Optional[Decimal]:
    """Return the amount as a ``Decimal`` or ``None`` when it is not a usable number.

    Amounts are plain decimal literals with at most ``MAX_AMOUNT_DIGITS``
    significant digits and no more than that many digits on either side of
    the point, so every accepted amount adds up exactly. ``NaN``,
    ``1e999999999`` and ``1_000`` are all refused.
    """
    if _blank(raw):
        return None
    text = raw.strip()
    if "_" in text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    _, digits, exponent = value.as_tuple()
    if len(digits) > MAX_AMOUNT_DIGITS:
        return None
    if exponent < -MAX_AMOUNT_DIGITS or value.adjusted() >= MAX_AMOUNT_DIGITS:
        return None
    return value


def validate_row(fields: Sequence[str], row: int) -> Union[Transaction, RejectedTransaction]:
    """Validate one row (``row`` is 1-based) and collect every violation.

    Exactly one of a :class:`Transaction` or a :class:`RejectedTransaction`
    is returned; validation problems are never raised.
    """
    raw = RawRow.from_fields(fields)
    tx_type = TransactionType.normalize(raw.type)

    account_id: Optional[str] = None
    if not _blank(raw.account_name) and not _blank(raw.card_number):
        account_id = derive_account_id(raw.account_name, raw.card_number)

    reasons: List[str] = []
    if _blank(raw.account_name):
        reasons.append(_required_message("accountName", raw.account_name))
    if _blank(raw.card_number):
        reasons.append(_required_message("cardNumber", raw.card_number))

    amount = parse_amount(raw.amount)
    if _blank(raw.amount):
        reasons.append(_required_message("amount", raw.amount))
    elif amount is None:
        reasons.append(f'"{LABELS["amount"]}" must be a number')

    if reasons:
        return RejectedTransaction(
            row=row,
            reasons=tuple(reasons),
            raw_data=raw.as_mapping(),
            account_name=_optional(raw.account_name) or UNKNOWN,
            account_id=account_id or NO_ID,
            card_number=_optional(raw.card_number) or UNKNOWN,
            transaction_amount=_optional(raw.amount) or "0",
            description=_optional(raw.description) or NO_DESCRIPTION,
            type=tx_type.value,
        )

    return Transaction(
        account_name=raw.account_name.strip(),
        card_number=raw.card_number.strip(),
        amount=amount,
        type=tx_type,
        description=_optional(raw.description),
        target_card_number=_optional(raw.target_card_number),
    )

"""Domain models for the transaction ledger."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Optional

_WHITESPACE = re.compile(r"\s+")

UNKNOWN = "Unknown"
NO_DESCRIPTION = "No Description"
NO_ID = "No ID"


class TransactionType(str, Enum):
    CREDIT = "Credit"
    DEBIT = "Debit"
    TRANSFER = "Transfer"
    UNKNOWN = "Unknown"

    @classmethod
    def normalize(cls, raw: Optional[str]) -> "TransactionType":
        """Case-insensitive lookup; anything unrecognised (or absent) is ``Unknown``."""
        if raw is None:
            return cls.UNKNOWN
        candidate = raw.strip().lower()
        for member in (cls.CREDIT, cls.DEBIT, cls.TRANSFER):
            if member.value.lower() == candidate:
                return member
        return cls.UNKNOWN


def derive_account_id(account_name: str, card_number: str) -> str:
    """``"Jane Doe", " 4111 "`` -> ``"Jane_Doe_4111"``."""
    return f"{_WHITESPACE.sub('_', account_name.strip())}_{card_number.strip()}"


def _decimal_to_json(value: Decimal) -> str:
    return str(value)


@dataclass(frozen=True, slots=True)
class Transaction:
    account_name: str
    card_number: str
    amount: Decimal
    type: TransactionType = TransactionType.UNKNOWN
    description: Optional[str] = None
    target_card_number: Optional[str] = None

    @property
    def account_id(self) -> str:
        return derive_account_id(self.account_name, self.card_number)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Transaction":
        # accountId is derived, a stored value is never trusted.
        return cls(
            account_name=str(payload["accountName"]),
            card_number=str(payload["cardNumber"]),
            amount=Decimal(str(payload["amount"])),
            type=TransactionType.normalize(payload.get("type")),
            description=payload.get("description"),
            target_card_number=payload.get("targetCardNumber"),
        )

    def to_mapping(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "accountName": self.account_name,
            "accountId": self.account_id,
            "cardNumber": self.card_number,
            "amount": _decimal_to_json(self.amount),
            "type": self.type.value,
        }
        if self.description is not None:
            payload["description"] = self.description
        if self.target_card_number is not None:
            payload["targetCardNumber"] = self.target_card_number
        return payload


@dataclass(frozen=True, slots=True)
class RejectedTransaction:
    row: int
    reasons: tuple[str, ...]
    raw_data: Dict[str, Optional[str]]
    account_name: str = UNKNOWN
    account_id: str = NO_ID
    card_number: str = UNKNOWN
    transaction_amount: str = "0"
    description: str = NO_DESCRIPTION
    type: str = UNKNOWN

    @property
    def error(self) -> str:
        return ", ".join(self.reasons)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "RejectedTransaction":
        reasons = payload.get("reasons")
        if not reasons:
            reasons = [part for part in str(payload.get("error", "")).split(", ") if part]
        return cls(
            row=int(payload.get("row", 0)),
            reasons=tuple(str(reason) for reason in reasons),
            raw_data=dict(payload.get("rawData") or {}),
            account_name=str(payload.get("accountName") or UNKNOWN),
            account_id=str(payload.get("accountId") or NO_ID),
            card_number=str(payload.get("cardNumber") or UNKNOWN),
            transaction_amount=str(payload.get("transactionAmount") or "0"),
            description=str(payload.get("description") or NO_DESCRIPTION),
            type=str(payload.get("type") or UNKNOWN),
        )

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "row": self.row,
            "error": self.error,
            "reasons": list(self.reasons),
            "rawData": dict(self.raw_data),
            "accountName": self.account_name,
            "accountId": self.account_id,
            "cardNumber": self.card_number,
            "transactionAmount": self.transaction_amount,
            "description": self.description,
            "type": self.type,
        }


@dataclass(slots=True)
class Account:
    account_name: str
    account_id: str
    cards: Dict[str, Decimal] = field(default_factory=dict)
    balance: Decimal = Decimal("0")

    def copy(self) -> "Account":
        return Account(
            account_name=self.account_name,
            account_id=self.account_id,
            cards=dict(self.cards),
            balance=self.balance,
        )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Account":
        cards = payload.get("cards") or {}
        return cls(
            account_name=str(payload["accountName"]),
            account_id=str(payload["accountId"]),
            cards={str(card): Decimal(str(amount)) for card, amount in cards.items()},
            balance=Decimal(str(payload.get("balance", "0"))),
        )

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "accountName": self.account_name,
            "accountId": self.account_id,
            "cards": {card: _decimal_to_json(amount) for card, amount in self.cards.items()},
            "balance": _decimal_to_json(self.balance),
        }


@dataclass(frozen=True, slots=True)
class IngestResult:
    accounts: list[Account]
    bad_transactions: list[RejectedTransaction]
    accepted: int
    rejected: int


@dataclass(frozen=True, slots=True)
class LedgerReport:
    accounts: list[Account]
    bad_transactions: list[RejectedTransaction]
    collections: list[Account]

"""Pydantic schemas used across the project."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.modules.ledger.models import TransactionType


class CamelModel(BaseModel):
    """Serialises with the camelCase keys of the upload/report wire format."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AccountResponse(CamelModel):
    account_name: str
    account_id: str
    cards: dict[str, float] = Field(default_factory=dict)
    balance: float


class TransactionResponse(CamelModel):
    account_name: str
    account_id: str
    card_number: str
    amount: float
    type: TransactionType
    description: Optional[str] = None
    target_card_number: Optional[str] = None


class RejectedTransactionResponse(CamelModel):
    row: int
    error: str
    reasons: list[str]
    raw_data: dict[str, Optional[str]] = Field(default_factory=dict)
    account_name: str
    account_id: str
    card_number: str
    transaction_amount: str
    description: str
    type: str


class UploadResponse(CamelModel):
    message: str
    accounts: list[AccountResponse]
    bad_transactions: list[RejectedTransactionResponse]
    accepted: int
    rejected: int


class ReportResponse(CamelModel):
    accounts: list[AccountResponse]
    bad_transactions: list[RejectedTransactionResponse]
    collections: list[AccountResponse]


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str

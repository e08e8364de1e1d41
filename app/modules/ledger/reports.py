"""Read-side projections over the account snapshot."""

from __future__ import annotations

from typing import Iterable, List

from .models import Account


def in_collections(account: Account) -> bool:
    return any(balance < 0 for balance in account.cards.values())


def build_collections(accounts: Iterable[Account]) -> List[Account]:
    """Accounts with at least one card balance below zero."""
    return [account for account in accounts if in_collections(account)]

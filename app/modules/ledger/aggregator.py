"""Fold validated transactions into per-account balances."""

from __future__ import annotations

from decimal import Decimal, localcontext
from typing import Dict, Iterable, Mapping

from .models import Account, Transaction
from .validator import MAX_AMOUNT_DIGITS

# Accepted amounts span 2 * MAX_AMOUNT_DIGITS decimal places; the rest is headroom for the sums.
FOLD_PRECISION = 2 * MAX_AMOUNT_DIGITS + 16


def apply_transactions(snapshot: Mapping[str, Account], transactions: Iterable[Transaction]) -> Dict[str, Account]:
    """Return a new snapshot with ``transactions`` applied in order.

    ``snapshot`` is left untouched. Applying the same batch to a snapshot that
    already contains it counts it twice: every upload is additive.
    """
    accounts: Dict[str, Account] = {account_id: account.copy() for account_id, account in snapshot.items()}
    with localcontext() as ctx:
        ctx.prec = FOLD_PRECISION
        for transaction in transactions:
            account = accounts.get(transaction.account_id)
            if account is None:
                account = Account(account_name=transaction.account_name, account_id=transaction.account_id)
                accounts[account.account_id] = account
            card = transaction.card_number
            account.cards[card] = account.cards.get(card, Decimal("0")) + transaction.amount
            account.balance += transaction.amount
    return accounts

"""Feature modules and their public exports."""

from . import ledger

__all__ = [
    "ledger",
]

"""Lexical CSV splitting for uploaded transaction files.

There is no header row. Every non-empty line is data, laid out as
:data:`COLUMNS`. The parser does not look at field contents: short or long
rows are passed through unchanged for the validator to judge.
"""

from __future__ import annotations

import csv
import io
from typing import Iterator, List

COLUMNS = (
    "accountName",
    "cardNumber",
    "amount",
    "type",
    "description",
    "targetCardNumber",
)


def parse_rows(text: str) -> Iterator[List[str]]:
    """Yield the rows of ``text`` as lists of raw string fields, skipping blank lines."""
    reader = csv.reader(io.StringIO(text, newline=""))
    for fields in reader:
        if not fields or (len(fields) == 1 and not fields[0].strip()):
            continue
        yield fields


class RowParser:
    """Restartable row sequence: each iteration re-reads ``text`` from the start."""

    def __init__(self, text: str) -> None:
        self._text = text

    def __iter__(self) -> Iterator[List[str]]:
        return parse_rows(self._text)

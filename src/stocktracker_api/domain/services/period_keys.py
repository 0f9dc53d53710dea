# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Period key parsing, arithmetic and labelling.

Purpose:
    Pure helpers around :class:`PeriodKey`: parse ISO keys, step one year
    back or forward, order keys and translate between ISO keys and the human
    labels stored alongside records (``"Jul 2025"`` for ``"2025-Q3"``).

Layer:
    domain/services

Notes:
    - Labels use the first month of each quarter: Q1 Jan, Q2 Apr, Q3 Jul,
      Q4 Oct.
    - Within one year an annual key sorts before the quarterly keys.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from stocktracker_api.domain.entities.period_key import PeriodKey
from stocktracker_api.domain.enums.financials import PeriodType
from stocktracker_api.domain.exceptions.financials import PeriodParseError

_ANNUAL_RE = re.compile(r"^(?P<year>\d{4})$")
_QUARTERLY_RE = re.compile(r"^(?P<year>\d{4})-Q(?P<quarter>[1-4])$")

QUARTER_LABEL_MONTHS: dict[int, str] = {1: "Jan", 2: "Apr", 3: "Jul", 4: "Oct"}

MONTH_TO_QUARTER: dict[str, int] = {
    "Jan": 1,
    "Feb": 1,
    "Mar": 1,
    "Apr": 2,
    "May": 2,
    "Jun": 2,
    "Jul": 3,
    "Aug": 3,
    "Sep": 3,
    "Oct": 4,
    "Nov": 4,
    "Dec": 4,
}


def parse_period_key(iso_key: str) -> PeriodKey:
    """Parse ``"YYYY"`` or ``"YYYY-Qn"`` into a :class:`PeriodKey`.

    Raises:
        PeriodParseError: If the string has any other shape.
    """
    text = (iso_key or "").strip()
    match = _QUARTERLY_RE.match(text)
    if match:
        return PeriodKey(
            period_type=PeriodType.QUARTERLY,
            year=int(match.group("year")),
            quarter=int(match.group("quarter")),
        )
    match = _ANNUAL_RE.match(text)
    if match:
        return PeriodKey(period_type=PeriodType.ANNUAL, year=int(match.group("year")))
    raise PeriodParseError(
        f"Unrecognised period key {iso_key!r}; expected 'YYYY' or 'YYYY-Qn'.",
        details={"period_iso": iso_key},
    )


def prior_year(key: PeriodKey) -> PeriodKey:
    """Return the same period one year earlier."""
    return PeriodKey(period_type=key.period_type, year=key.year - 1, quarter=key.quarter)


def next_year(key: PeriodKey) -> PeriodKey:
    """Return the same period one year later."""
    return PeriodKey(period_type=key.period_type, year=key.year + 1, quarter=key.quarter)


def prior_year_iso(iso_key: str) -> str | None:
    """Return the prior-year ISO key, or None when ``iso_key`` does not parse."""
    try:
        return prior_year(parse_period_key(iso_key)).iso_key
    except PeriodParseError:
        return None


def compare_period_keys(a: PeriodKey, b: PeriodKey) -> int:
    """Three-way comparison: year first, then quarter (annual before quarters)."""
    if a.sort_key < b.sort_key:
        return -1
    if a.sort_key > b.sort_key:
        return 1
    return 0


def sort_iso_keys(keys: Iterable[str]) -> list[str]:
    """Sort ISO keys ascending; unparseable keys sort last, lexicographically."""
    parsed: list[PeriodKey] = []
    unparsed: list[str] = []
    for raw in keys:
        try:
            parsed.append(parse_period_key(raw))
        except PeriodParseError:
            unparsed.append(raw)
    parsed.sort(key=lambda k: k.sort_key)
    return [k.iso_key for k in parsed] + sorted(unparsed)


def format_period_label(key: PeriodKey) -> str:
    """Render the human label for a period (``"Jul 2025"`` or ``"2025"``)."""
    if key.quarter is None:
        return str(key.year)
    return f"{QUARTER_LABEL_MONTHS[key.quarter]} {key.year}"


def label_to_period_iso(label: str, period_type: PeriodType, *, strict: bool = False) -> str:
    """Map a human label back to its ISO key.

    Any month of a quarter maps to that quarter (``"Aug 2025"`` gives
    ``"2025-Q3"``). Annual labels are returned as-is.

    Args:
        label: Human label such as ``"Jul 2025"``.
        period_type: Cadence the label belongs to.
        strict: Raise instead of echoing the input on an unrecognised shape.

    Raises:
        PeriodParseError: If ``strict`` is set and the label cannot be mapped.
    """
    text = label.strip()
    if period_type is PeriodType.ANNUAL:
        if strict and not _ANNUAL_RE.match(text):
            raise PeriodParseError(
                f"Unrecognised annual label {label!r}.",
                details={"label": label},
            )
        return text if strict else label

    parts = text.split()
    if len(parts) == 2 and parts[0] in MONTH_TO_QUARTER and parts[1].isdigit():
        return f"{parts[1]}-Q{MONTH_TO_QUARTER[parts[0]]}"

    if strict:
        raise PeriodParseError(
            f"Unrecognised quarterly label {label!r}; expected 'Mon YYYY'.",
            details={"label": label},
        )
    return label

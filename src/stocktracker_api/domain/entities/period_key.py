# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Period key value object.

Purpose:
    Canonical, sortable representation of a reporting period. Quarterly keys
    render as ``"2025-Q3"``; annual keys as ``"2025"``.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass

from stocktracker_api.domain.entities.base import BaseEntity
from stocktracker_api.domain.enums.financials import PeriodType
from stocktracker_api.domain.exceptions.financials import PeriodParseError

MIN_QUARTER = 1
MAX_QUARTER = 4


@dataclass(frozen=True, slots=True)
class PeriodKey(BaseEntity):
    """A reporting period for one entity and cadence.

    Attributes:
        period_type: Quarterly or annual cadence.
        year: Calendar/fiscal year label.
        quarter: Quarter number (1-4) for quarterly keys, None for annual keys.
    """

    period_type: PeriodType
    year: int
    quarter: int | None = None

    def __post_init__(self) -> None:
        if self.period_type is PeriodType.QUARTERLY:
            if self.quarter is None or not MIN_QUARTER <= self.quarter <= MAX_QUARTER:
                raise PeriodParseError(
                    "Quarterly period keys require a quarter between 1 and 4.",
                    details={"year": self.year, "quarter": self.quarter},
                )
        elif self.quarter is not None:
            raise PeriodParseError(
                "Annual period keys must not carry a quarter.",
                details={"year": self.year, "quarter": self.quarter},
            )

    @property
    def iso_key(self) -> str:
        """Stable sortable string form of the period."""
        if self.quarter is None:
            return f"{self.year}"
        return f"{self.year}-Q{self.quarter}"

    @property
    def sort_key(self) -> tuple[int, int]:
        """Ordering tuple: year first, then quarter (annual sorts first)."""
        return (self.year, self.quarter or 0)

    def __str__(self) -> str:
        return self.iso_key

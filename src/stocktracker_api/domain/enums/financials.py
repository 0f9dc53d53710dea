# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Financial statement enumerations.

Purpose:
    Enumerate the reporting cadences, statement sections and the fixed set of
    standard (schema-known) metric keys. Wire values are the camelCase keys
    used by the data-entry clients, so they are stored verbatim.

Layer:
    domain/enums
"""

from __future__ import annotations

from enum import Enum


class PeriodType(str, Enum):
    """Reporting cadence for a financial record."""

    QUARTERLY = "quarterly"
    ANNUAL = "annual"


class MetricSection(str, Enum):
    """Statement section a metric definition is displayed under."""

    INCOME = "income"
    BALANCE = "balance"
    CASHFLOW = "cashflow"


#: Display order of sections when a catalog spans all of them.
SECTION_ORDER: dict[MetricSection, int] = {
    MetricSection.INCOME: 0,
    MetricSection.BALANCE: 1,
    MetricSection.CASHFLOW: 2,
}


class StandardMetric(str, Enum):
    """Schema-known metric keys, grouped by statement section."""

    # Income statement
    REVENUE = "revenue"
    OPERATING_EXPENSE = "operatingExpense"
    NET_INCOME = "netIncome"
    NET_PROFIT_MARGIN = "netProfitMargin"
    EPS = "eps"
    EBITDA = "ebitda"
    EFFECTIVE_TAX_RATE = "effectiveTaxRate"

    # Balance sheet
    CASH_AND_SHORT_TERM_INVESTMENTS = "cashAndShortTermInvestments"
    TOTAL_ASSETS = "totalAssets"
    TOTAL_LIABILITIES = "totalLiabilities"
    TOTAL_EQUITY = "totalEquity"
    SHARES_OUTSTANDING = "sharesOutstanding"
    PRICE_TO_BOOK = "priceToBook"
    RETURN_ON_ASSETS = "returnOnAssets"
    RETURN_ON_CAPITAL = "returnOnCapital"

    # Cash flow
    CASH_FROM_OPERATIONS = "cashFromOperations"
    CASH_FROM_INVESTING = "cashFromInvesting"
    CASH_FROM_FINANCING = "cashFromFinancing"
    NET_CHANGE_IN_CASH = "netChangeInCash"
    FREE_CASH_FLOW = "freeCashFlow"

    @classmethod
    def from_key(cls, key: str) -> StandardMetric | None:
        """Return the standard metric for ``key`` or None for custom keys."""
        try:
            return cls(key)
        except ValueError:
            return None


STANDARD_METRIC_SECTIONS: dict[StandardMetric, MetricSection] = {
    StandardMetric.REVENUE: MetricSection.INCOME,
    StandardMetric.OPERATING_EXPENSE: MetricSection.INCOME,
    StandardMetric.NET_INCOME: MetricSection.INCOME,
    StandardMetric.NET_PROFIT_MARGIN: MetricSection.INCOME,
    StandardMetric.EPS: MetricSection.INCOME,
    StandardMetric.EBITDA: MetricSection.INCOME,
    StandardMetric.EFFECTIVE_TAX_RATE: MetricSection.INCOME,
    StandardMetric.CASH_AND_SHORT_TERM_INVESTMENTS: MetricSection.BALANCE,
    StandardMetric.TOTAL_ASSETS: MetricSection.BALANCE,
    StandardMetric.TOTAL_LIABILITIES: MetricSection.BALANCE,
    StandardMetric.TOTAL_EQUITY: MetricSection.BALANCE,
    StandardMetric.SHARES_OUTSTANDING: MetricSection.BALANCE,
    StandardMetric.PRICE_TO_BOOK: MetricSection.BALANCE,
    StandardMetric.RETURN_ON_ASSETS: MetricSection.BALANCE,
    StandardMetric.RETURN_ON_CAPITAL: MetricSection.BALANCE,
    StandardMetric.CASH_FROM_OPERATIONS: MetricSection.CASHFLOW,
    StandardMetric.CASH_FROM_INVESTING: MetricSection.CASHFLOW,
    StandardMetric.CASH_FROM_FINANCING: MetricSection.CASHFLOW,
    StandardMetric.NET_CHANGE_IN_CASH: MetricSection.CASHFLOW,
    StandardMetric.FREE_CASH_FLOW: MetricSection.CASHFLOW,
}

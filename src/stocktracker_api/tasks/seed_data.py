# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Sample companies and quarterly statements loaded by ``stocktracker seed``."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from stocktracker_api.domain.entities.company import Company

SAMPLE_COMPANIES: tuple[Company, ...] = (
    Company(
        symbol="JKH.N0000",
        name="John Keells Holdings PLC",
        isin="LK0092N00003",
        category="Diversified",
    ),
    Company(symbol="HAYL.N0000", name="Hayleys PLC", category="Diversified"),
    Company(symbol="COMB.N0000", name="Commercial Bank of Ceylon PLC", category="Banking"),
    Company(symbol="DIAL.N0000", name="Dialog Axiata PLC", category="Telecommunications"),
)

_JKH_QUARTERS: tuple[tuple[str, str, dict[str, Any]], ...] = (
    (
        "2024-Q3",
        "Jul 2024",
        {
            "revenue": 1520000000,
            "operatingExpense": 890000000,
            "netIncome": 408000000,
            "netProfitMargin": "26.84",
            "eps": "3.43",
            "ebitda": 402000000,
            "effectiveTaxRate": "-22.5",
            "cashAndShortTermInvestments": 1990000000,
            "totalAssets": 11200000000,
            "totalLiabilities": 4800000000,
            "totalEquity": 6400000000,
            "sharesOutstanding": 185750000,
            "priceToBook": "2.95",
            "returnOnAssets": "3.64",
            "returnOnCapital": "6.38",
            "cashFromOperations": 455000000,
            "cashFromInvesting": 53800,
            "cashFromFinancing": 55000000,
            "netChangeInCash": 2040000000,
            "freeCashFlow": 320000000,
        },
    ),
    (
        "2024-Q4",
        "Oct 2024",
        {
            "revenue": 1580000000,
            "operatingExpense": 920000000,
            "netIncome": 385000000,
            "netProfitMargin": "24.37",
            "eps": "3.24",
            "ebitda": 378000000,
            "effectiveTaxRate": "-24.2",
            "cashAndShortTermInvestments": 2050000000,
            "totalAssets": 11800000000,
            "totalLiabilities": 5100000000,
            "totalEquity": 6700000000,
            "sharesOutstanding": 185750000,
            "priceToBook": "2.88",
            "returnOnAssets": "3.26",
            "returnOnCapital": "5.75",
            "cashFromOperations": 420000000,
            "cashFromInvesting": -120000000,
            "cashFromFinancing": 78000000,
            "netChangeInCash": -580000000,
            "freeCashFlow": 290000000,
        },
    ),
    (
        "2025-Q1",
        "Jan 2025",
        {
            "revenue": 1620000000,
            "operatingExpense": 980000000,
            "netIncome": 320000000,
            "netProfitMargin": "19.75",
            "eps": "3.28",
            "ebitda": 315000000,
            "effectiveTaxRate": "-25.8",
            "cashAndShortTermInvestments": 2180000000,
            "totalAssets": 25500000000,
            "totalLiabilities": 11200000000,
            "totalEquity": 14300000000,
            "sharesOutstanding": 185750000,
            "priceToBook": "2.92",
            "returnOnAssets": "1.25",
            "returnOnCapital": "2.24",
            "cashFromOperations": 380000000,
            "cashFromInvesting": -280000000,
            "cashFromFinancing": 125000000,
            "netChangeInCash": -1200000000,
            "freeCashFlow": 245000000,
        },
    ),
    (
        "2025-Q2",
        "Apr 2025",
        {
            "revenue": 1680000000,
            "operatingExpense": 1150000000,
            "netIncome": 278000000,
            "netProfitMargin": "16.55",
            "eps": "3.32",
            "ebitda": 272000000,
            "effectiveTaxRate": "-26.5",
            "cashAndShortTermInvestments": 2320000000,
            "totalAssets": 38500000000,
            "totalLiabilities": 16800000000,
            "totalEquity": 21700000000,
            "sharesOutstanding": 185750000,
            "priceToBook": "3.02",
            "returnOnAssets": "0.72",
            "returnOnCapital": "1.28",
            "cashFromOperations": 520000000,
            "cashFromInvesting": -8500000000,
            "cashFromFinancing": 2100000000,
            "netChangeInCash": -5800000000,
            "freeCashFlow": 680000000,
        },
    ),
    (
        "2025-Q3",
        "Jul 2025",
        {
            "revenue": 1740000000,
            "operatingExpense": 1240000000,
            "netIncome": 242510000,
            "netProfitMargin": "13.94",
            "eps": "3.39",
            "ebitda": 242380000,
            "effectiveTaxRate": "-27.98",
            "cashAndShortTermInvestments": 2590000000,
            "totalAssets": 48230000000,
            "totalLiabilities": 20620000000,
            "totalEquity": 27610000000,
            "sharesOutstanding": 185750000,
            "priceToBook": "3.11",
            "returnOnAssets": "1.15",
            "returnOnCapital": "1.30",
            "cashFromOperations": 670960000,
            "cashFromInvesting": -16500000000,
            "cashFromFinancing": 4240000000,
            "netChangeInCash": -11590000000,
            "freeCashFlow": 1000000000,
        },
    ),
)


def sample_quarters() -> list[tuple[str, str, str, dict[str, Decimal]]]:
    """Return ``(symbol, period_iso, label, values)`` tuples for the sample records."""
    return [
        ("JKH.N0000", iso, label, {k: Decimal(str(v)) for k, v in values.items()})
        for iso, label, values in _JKH_QUARTERS
    ]

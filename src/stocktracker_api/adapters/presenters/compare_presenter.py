# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Cross-entity comparison presenter."""

from __future__ import annotations

from stocktracker_api.adapters.presenters.base_presenter import decimal_to_str
from stocktracker_api.adapters.schemas.http.compare import ComparisonHTTP
from stocktracker_api.domain.entities.comparison import ComparisonResult


def present_comparison(result: ComparisonResult) -> ComparisonHTTP:
    return ComparisonHTTP(
        metric_key=result.metric_key,
        period_type=result.period_type,
        common_periods=list(result.common_periods),
        labels=list(result.labels),
        per_entity={
            symbol: [decimal_to_str(v) for v in values]
            for symbol, values in result.per_entity.items()
        },
        failed_symbols=list(result.failed_symbols),
    )

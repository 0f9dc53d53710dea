# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""ORM models. Importing this package registers every table on ``Base.metadata``."""

from stocktracker_api.infrastructure.database.models.base import Base, metadata
from stocktracker_api.infrastructure.database.models.financials import (
    CategoryMetricDefaultsRow,
    CompanyRow,
    FinancialMetricValueRow,
    FinancialRecordRow,
    MetricDefinitionRow,
)

__all__ = [
    "Base",
    "metadata",
    "CategoryMetricDefaultsRow",
    "CompanyRow",
    "FinancialMetricValueRow",
    "FinancialRecordRow",
    "MetricDefinitionRow",
]

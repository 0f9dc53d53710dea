# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""ORM models for financial records, the metric catalog and companies.

Tables:
    financial_records         One row per (symbol, period_type, period_iso).
    financial_metric_values   One row per metric value of a record.
    metric_definitions        Base metric catalog.
    category_metric_defaults  Ordered catalog snapshot per category.
    companies                 Tracked company registry.
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stocktracker_api.infrastructure.database.models.base import (
    Base,
    IdentityMixin,
    JSONType,
    TimestampMixin,
)

#: Precision used for stored metric values.
METRIC_VALUE_TYPE = Numeric(38, 10, asdecimal=True)


class FinancialRecordRow(IdentityMixin, TimestampMixin, Base):
    """Identity and label of one stored period."""

    __tablename__ = "financial_records"
    __table_args__ = (
        UniqueConstraint(
            "symbol",
            "period_type",
            "period_iso",
            name="uq_financial_records_symbol_period",
        ),
    )

    symbol: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    period_type: Mapped[str] = mapped_column(String(16), nullable=False)
    period_iso: Mapped[str] = mapped_column(String(16), nullable=False)
    period_label: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    values: Mapped[list[FinancialMetricValueRow]] = relationship(
        back_populates="record",
        cascade="all, delete-orphan",
        lazy="selectin",
        passive_deletes=True,
    )


class FinancialMetricValueRow(IdentityMixin, Base):
    """One metric value; ``is_custom`` separates standard from custom keys."""

    __tablename__ = "financial_metric_values"
    __table_args__ = (
        UniqueConstraint(
            "record_id",
            "is_custom",
            "metric_key",
            name="uq_financial_metric_values_record_key",
        ),
    )

    record_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("financial_records.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_custom: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    metric_key: Mapped[str] = mapped_column(String(128), nullable=False)
    value: Mapped[Decimal] = mapped_column(METRIC_VALUE_TYPE, nullable=False)

    record: Mapped[FinancialRecordRow] = relationship(back_populates="values")


class MetricDefinitionRow(IdentityMixin, TimestampMixin, Base):
    """Base catalog entry."""

    __tablename__ = "metric_definitions"

    key: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    section: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    unit: Mapped[str] = mapped_column(String(16), nullable=False)
    order: Mapped[int] = mapped_column("sort_order", Integer, nullable=False, default=0)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)


class CategoryMetricDefaultsRow(IdentityMixin, TimestampMixin, Base):
    """Ordered catalog snapshot stored as a JSON array of definitions."""

    __tablename__ = "category_metric_defaults"

    category: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    metrics: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)


class CompanyRow(IdentityMixin, TimestampMixin, Base):
    """Tracked company with flat upstream market fields."""

    __tablename__ = "companies"

    symbol: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    isin: Mapped[str | None] = mapped_column(String(32), nullable=True)
    category: Mapped[str] = mapped_column(String(128), nullable=False, default="", index=True)
    market_data: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)

# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Create financial records, metric catalog and company tables."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# Revision identifiers, used by Alembic.
revision = "20261001_0001"
down_revision = None
branch_labels = None
depends_on = None

_JSON = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "financial_records",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("symbol", sa.String(length=32), nullable=False),
        sa.Column("period_type", sa.String(length=16), nullable=False),
        sa.Column("period_iso", sa.String(length=16), nullable=False),
        sa.Column("period_label", sa.String(length=64), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_financial_records"),
        sa.UniqueConstraint(
            "symbol",
            "period_type",
            "period_iso",
            name="uq_financial_records_symbol_period",
        ),
    )
    op.create_index("ix_financial_records_symbol", "financial_records", ["symbol"])

    op.create_table(
        "financial_metric_values",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("record_id", sa.Uuid(), nullable=False),
        sa.Column("is_custom", sa.Boolean(), nullable=False),
        sa.Column("metric_key", sa.String(length=128), nullable=False),
        sa.Column("value", sa.Numeric(38, 10), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_financial_metric_values"),
        sa.ForeignKeyConstraint(
            ["record_id"],
            ["financial_records.id"],
            name="fk_financial_metric_values_record_id_financial_records",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "record_id",
            "is_custom",
            "metric_key",
            name="uq_financial_metric_values_record_key",
        ),
    )
    op.create_index(
        "ix_financial_metric_values_record_id",
        "financial_metric_values",
        ["record_id"],
    )

    op.create_table(
        "metric_definitions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("key", sa.String(length=128), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("section", sa.String(length=16), nullable=False),
        sa.Column("unit", sa.String(length=16), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False),
        sa.Column("created_by", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_metric_definitions"),
        sa.UniqueConstraint("key", name="uq_metric_definitions_key"),
    )
    op.create_index("ix_metric_definitions_section", "metric_definitions", ["section"])

    op.create_table(
        "category_metric_defaults",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("category", sa.String(length=128), nullable=False),
        sa.Column("metrics", _JSON, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_category_metric_defaults"),
        sa.UniqueConstraint("category", name="uq_category_metric_defaults_category"),
    )

    op.create_table(
        "companies",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("symbol", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("isin", sa.String(length=32), nullable=True),
        sa.Column("category", sa.String(length=128), nullable=False),
        sa.Column("market_data", _JSON, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_companies"),
        sa.UniqueConstraint("symbol", name="uq_companies_symbol"),
    )
    op.create_index("ix_companies_category", "companies", ["category"])


def downgrade() -> None:
    op.drop_index("ix_companies_category", table_name="companies")
    op.drop_table("companies")
    op.drop_table("category_metric_defaults")
    op.drop_index("ix_metric_definitions_section", table_name="metric_definitions")
    op.drop_table("metric_definitions")
    op.drop_index(
        "ix_financial_metric_values_record_id",
        table_name="financial_metric_values",
    )
    op.drop_table("financial_metric_values")
    op.drop_index("ix_financial_records_symbol", table_name="financial_records")
    op.drop_table("financial_records")

# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Stocktracker CLI: operational commands (schema, seed, sync).

Commands:
    db init          Create every table on the configured database.
    seed             Load the default metric catalog and sample data.
    sync company     Fetch one company from the exchange and upsert it.

Environment:
    DATABASE_URL     Async SQLAlchemy URL.
    CSE_BASE_URL     Exchange API base URL (optional).
"""

from __future__ import annotations

import asyncio

import typer

from stocktracker_api.adapters.gateways.cse_gateway import CseMarketDataGateway
from stocktracker_api.adapters.uow.sqlalchemy_uow import SqlAlchemyUnitOfWork
from stocktracker_api.application.use_cases.companies.sync_company import SyncCompanyUseCase
from stocktracker_api.application.use_cases.financials.upsert_financial_record import (
    UpsertFinancialRecordRequest,
    UpsertFinancialRecordUseCase,
)
from stocktracker_api.config.settings import get_settings
from stocktracker_api.domain.entities.financial_record import MetricValues
from stocktracker_api.domain.enums.financials import PeriodType
from stocktracker_api.domain.exceptions.base import DomainError
from stocktracker_api.domain.interfaces.repositories.companies_repository import (
    CompaniesRepository,
)
from stocktracker_api.domain.interfaces.repositories.metric_definitions_repository import (
    MetricDefinitionsRepository,
)
from stocktracker_api.domain.services.metric_catalog import default_catalog
from stocktracker_api.infrastructure.database.session import (
    create_all,
    dispose_engine,
    get_engine,
    get_sessionmaker,
)
from stocktracker_api.infrastructure.external_apis.cse.client import CseClient
from stocktracker_api.infrastructure.external_apis.cse.settings import CseSettings
from stocktracker_api.infrastructure.logging.logger import configure_root_logging, get_json_logger
from stocktracker_api.tasks.seed_data import SAMPLE_COMPANIES, sample_quarters

configure_root_logging()
log = get_json_logger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)
db_app = typer.Typer(no_args_is_help=True)
sync_app = typer.Typer(no_args_is_help=True)
app.add_typer(db_app, name="db")
app.add_typer(sync_app, name="sync")


def _uow() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory=get_sessionmaker())


@db_app.command("init")
def db_init() -> None:
    """Create all tables (development and tests; production uses Alembic)."""

    async def _run() -> None:
        try:
            await create_all(get_engine())
        finally:
            await dispose_engine()
        log.info("db.init.done")

    asyncio.run(_run())


async def seed_database() -> dict[str, int]:
    """Insert the default catalog, sample companies and sample records.

    Existing catalog entries and records are left as they are; companies are
    upserted.
    """
    settings = get_settings()
    counts = {"metrics": 0, "companies": 0, "records": 0}

    async with _uow() as tx:
        definitions: MetricDefinitionsRepository = tx.get_repository(MetricDefinitionsRepository)
        existing = {d.key for d in await definitions.list_all()}
        for definition in default_catalog(settings.default_metric_unit):
            if definition.key not in existing:
                await definitions.add(definition)
                counts["metrics"] += 1

        companies: CompaniesRepository = tx.get_repository(CompaniesRepository)
        for company in SAMPLE_COMPANIES:
            await companies.save(company)
            counts["companies"] += 1
        await tx.commit()

    upsert = UpsertFinancialRecordUseCase(_uow(), store_timeout_s=settings.store_timeout_s)
    for symbol, period_iso, label, values in sample_quarters():
        result = await upsert.execute(
            UpsertFinancialRecordRequest(
                symbol=symbol,
                period_type=PeriodType.QUARTERLY,
                period_iso=period_iso,
                period_label=label,
                values=MetricValues.from_flat(values),
                overwrite=True,
            )
        )
        counts["records"] += int(result.created)
    return counts


@app.command("seed")
def seed() -> None:
    """Load the default metric catalog and the sample data set."""

    async def _run() -> None:
        try:
            counts = await seed_database()
        finally:
            await dispose_engine()
        log.info("seed.done", extra=counts)
        typer.echo(
            f"Seeded {counts['metrics']} metrics, {counts['companies']} companies, "
            f"{counts['records']} records."
        )

    asyncio.run(_run())


@sync_app.command("company")
def sync_company(symbol: str = typer.Argument(..., help="Exchange symbol, e.g. JKH.N0000.")) -> None:
    """Fetch one company from the exchange and upsert it into the registry."""
    settings = get_settings()

    async def _run() -> None:
        client = CseClient(CseSettings())
        try:
            use_case = SyncCompanyUseCase(
                _uow(),
                CseMarketDataGateway(client),
                store_timeout_s=settings.store_timeout_s,
            )
            company = await use_case.execute(symbol)
        finally:
            await client.aclose()
            await dispose_engine()
        typer.echo(f"{company.symbol}: {company.name} ({len(company.market_data)} market fields)")

    try:
        asyncio.run(_run())
    except DomainError as exc:
        log.error("sync.company.failed", extra={"symbol": symbol, "code": exc.code})
        typer.echo(f"Sync failed [{exc.code}]: {exc.message}", err=True)
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()

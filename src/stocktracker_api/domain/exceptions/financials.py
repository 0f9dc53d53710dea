# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""
Financials domain exceptions.

Purpose:
    Error taxonomy for the record store, the Y/Y engine, the metric catalog and
    the comparator. Adapters translate persistence/driver errors into these
    types; routers map them to HTTP via ``code`` / ``http_status``.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from .base import DomainError


class ValidationError(DomainError):
    """Malformed input (bad period format, out-of-range symbol count, ...)."""

    code = "VALIDATION_ERROR"
    http_status = 400


class PeriodParseError(ValidationError):
    """A period ISO key or label could not be parsed."""

    code = "INVALID_PERIOD"


class ConflictError(DomainError):
    """Unique-constraint violation on create or non-forced upsert."""

    code = "CONFLICT"
    http_status = 409


class NotFoundError(DomainError):
    """Delete/update target absent, or no category defaults stored."""

    code = "NOT_FOUND"
    http_status = 404


class UpstreamTimeoutError(DomainError):
    """A store call or fan-out sub-call exceeded its time bound."""

    code = "UPSTREAM_TIMEOUT"
    http_status = 504

# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Shared dataclass configuration for domain entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BaseEntity:
    """Immutable, slotted value holder.

    Subclasses that guard invariants (see ``PeriodKey``) do so in
    ``__post_init__`` and raise a ``DomainError`` subclass.
    """

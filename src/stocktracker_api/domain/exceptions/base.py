# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Root of the domain exception tree.

Every subclass pins a stable machine ``code`` and the HTTP status the API
boundary answers with; ``details`` carries the offending identifiers
(symbol, period key, metric key) into the error envelope.
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    code: str = "DOMAIN_ERROR"
    http_status: int = 500

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}

    def __str__(self) -> str:
        return self.message or self.code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

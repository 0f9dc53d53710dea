# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Common base for the versioned resource routers.

Each resource router mounts at ``/<version>/<resource>``, documents the shared
error envelope for every failure status and returns its payload through
:meth:`BaseRouter.send_success`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from fastapi import APIRouter, Request, Response

from stocktracker_api.adapters.presenters.base_presenter import BasePresenter
from stocktracker_api.adapters.schemas.http.envelopes import ErrorEnvelope
from stocktracker_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

_presenter = BasePresenter()

_ERROR_DESCRIPTIONS: dict[int, str] = {
    400: "Invalid parameter or period key.",
    404: "Resource does not exist.",
    409: "Resource already exists.",
    422: "Request body or query failed validation.",
    500: "Unexpected server failure.",
    502: "Market data provider failed or returned an unexpected payload.",
    504: "The store did not answer in time.",
}


def trace_id_of(request: Request) -> str | None:
    return getattr(request.state, "trace_id", None)


class BaseRouter(APIRouter):
    """``APIRouter`` bound to ``/<version>/<resource>``.

    Args:
        version: Version segment such as ``"v1"``.
        resource: Resource segment such as ``"financials"``.
        tags: OpenAPI tags for every route on this router.
        **kwargs: Passed through to :class:`fastapi.APIRouter`.
    """

    def __init__(
        self,
        *,
        version: str,
        resource: str,
        tags: Sequence[str] | None = None,
        **kwargs: Any,
    ) -> None:
        prefix = f"/{version}/{resource}"
        super().__init__(prefix=prefix, tags=list(tags or ()), **kwargs)
        logger.debug("router_initialized", extra={"prefix": prefix})

    @staticmethod
    def send_success(
        request: Request,
        response: Response,
        data: Any,
        *,
        status_code: int | None = None,
    ) -> Any:
        """Return ``data`` as a success envelope and set its headers on ``response``."""
        result = _presenter.present_success(
            data=data, trace_id=trace_id_of(request), status_code=status_code
        )
        BasePresenter.apply_headers(result, response)
        return result.body

    @staticmethod
    def std_error_responses() -> dict[int | str, dict[str, Any]]:
        return {
            status: {"model": ErrorEnvelope, "description": description}
            for status, description in _ERROR_DESCRIPTIONS.items()
        }

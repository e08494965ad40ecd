"""FastAPI router exposing parcel tools to the assistant."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request

from landscore.assistant.tools import ParcelToolDispatcher
from landscore.core.errors import StoreError, ValidationError
from landscore.web.parcel_router import translate_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/assistant", tags=["assistant"])


def _dispatcher(request: Request) -> ParcelToolDispatcher:
    dispatcher = getattr(request.app.state, "tool_dispatcher", None)
    if dispatcher is None:
        raise HTTPException(status_code=503, detail="Assistant tools not available")
    return dispatcher


@router.get("/tools")
async def list_tools(request: Request) -> list[dict[str, Any]]:
    """Tool definitions for the assistant's function-calling prompt."""
    return [d.model_dump() for d in _dispatcher(request).definitions]


@router.post("/tools/{name}")
async def call_tool(
    name: str,
    request: Request,
    args: dict[str, Any] = Body(default_factory=dict),
) -> dict[str, Any]:
    dispatcher = _dispatcher(request)
    logger.info(
        "Assistant tool %s requested by %s (role=%s)",
        name,
        getattr(request.state, "user_id", None) or "anonymous",
        getattr(request.state, "role", None),
    )
    try:
        result = await dispatcher.dispatch(name, args)
    except (ValidationError, StoreError) as exc:
        raise translate_error(exc)
    return result.model_dump(by_alias=True)

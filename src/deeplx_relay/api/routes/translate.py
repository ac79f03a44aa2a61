"""Translate endpoints.

Three request shapes funnel into the same
:class:`~deeplx_relay.translation.service.RelayOrchestrator`:

``POST /translate``
    Free mode.  Body ``{text, source_lang, target_lang, tag_handling}``.
``POST /v1/translate``
    Pro mode.  Same body; a session credential is required, taken from a
    ``dl_session`` cookie or, failing that, from ``backend.dl_session``.
    Dotted credentials belong to free accounts and are refused before any
    network call.
``POST /v2/translate``
    Official-API compatible.  ``text`` may be a string or a list of
    strings; ``target_lang`` may come from the body or the query string.

All three require the access token (see :mod:`deeplx_relay.api.auth`).
The orchestrator call is blocking, so it runs in the thread pool.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from deeplx_relay.api.auth import verify_access_token
from deeplx_relay.api.models import (
    ErrorResponse,
    TranslateRequest,
    TranslateResponse,
    V2TranslateRequest,
    V2TranslateResponse,
)
from deeplx_relay.translation.models import (
    MSG_INTERNAL_ERROR,
    MSG_INVALID_PAYLOAD,
    MSG_INVALID_TAG_HANDLING,
    SESSION_COOKIE,
    TranslationOutcome,
)
from deeplx_relay.translation.service import (
    RelayOrchestrator,
    is_valid_tag_handling,
    pro_session_error,
)

logger = logging.getLogger(__name__)

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status: {"model": ErrorResponse} for status in (400, 401, 404, 429, 500, 503)
}


# ── Request helpers ───────────────────────────────────────────────────────────


async def read_json_body(request: Request) -> dict[str, Any]:
    """Return the JSON object body, or ``{}`` when absent or not an object."""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def parse_body(model: type[BaseModel], body: dict[str, Any]) -> Any:
    """Validate ``body`` against ``model``; type errors become 400."""
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        logger.debug("Rejected request payload: %s", exc)
        raise HTTPException(status_code=400, detail=MSG_INVALID_PAYLOAD) from exc


def require_valid_tag_handling(tag_handling: str | None) -> None:
    if not is_valid_tag_handling(tag_handling):
        raise HTTPException(status_code=400, detail=MSG_INVALID_TAG_HANDLING)


def resolve_session(request: Request) -> str:
    """Cookie ``dl_session`` wins over the configured session."""
    return request.cookies.get(SESSION_COOKIE) or request.app.state.config.backend.dl_session


def require_pro_session(dl_session: str) -> None:
    if message := pro_session_error(dl_session):
        raise HTTPException(status_code=401, detail=message)


# ── Response helpers ──────────────────────────────────────────────────────────


def outcome_response(outcome: TranslationOutcome, body: dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=outcome.code, content=body)


def internal_error(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"code": 500, "message": str(exc) or MSG_INTERNAL_ERROR},
    )


# ── Router ────────────────────────────────────────────────────────────────────


def router(orchestrator: RelayOrchestrator) -> APIRouter:
    """Build the translate router bound to ``orchestrator``."""
    api = APIRouter(dependencies=[Depends(verify_access_token)], responses=_ERROR_RESPONSES)

    async def run_translation(
        source_lang: str | None,
        target_lang: str | None,
        text: str | None,
        tag_handling: str | None,
        dl_session: str,
    ) -> TranslationOutcome:
        return await run_in_threadpool(
            orchestrator.translate,
            source_lang,
            target_lang,
            text,
            tag_handling,
            dl_session,
        )

    @api.post("/translate", response_model=TranslateResponse)
    async def translate_free(request: Request):
        """Free API endpoint, no Pro account required."""
        body = parse_body(TranslateRequest, await read_json_body(request))
        require_valid_tag_handling(body.tag_handling)

        try:
            outcome = await run_translation(
                body.source_lang, body.target_lang, body.text, body.tag_handling, ""
            )
        except Exception as exc:
            logger.exception("Unhandled error in /translate")
            return internal_error(exc)
        return outcome_response(outcome, outcome.to_response())

    @api.post("/v1/translate", response_model=TranslateResponse)
    async def translate_pro(request: Request):
        """Pro API endpoint, requires a Pro account session."""
        body = parse_body(TranslateRequest, await read_json_body(request))
        dl_session = resolve_session(request)

        require_valid_tag_handling(body.tag_handling)
        require_pro_session(dl_session)

        try:
            outcome = await run_translation(
                body.source_lang, body.target_lang, body.text, body.tag_handling, dl_session
            )
        except Exception as exc:
            logger.exception("Unhandled error in /v1/translate")
            return internal_error(exc)
        return outcome_response(outcome, outcome.to_response())

    @api.post("/v2/translate", response_model=V2TranslateResponse)
    async def translate_v2(request: Request):
        """Free API endpoint, consistent with the official API format."""
        body = parse_body(V2TranslateRequest, await read_json_body(request))
        target_lang = body.target_lang or request.query_params.get("target_lang")

        if not body.text or not target_lang:
            raise HTTPException(status_code=400, detail=MSG_INVALID_PAYLOAD)

        try:
            outcome = await run_translation("", target_lang, body.joined_text(), "", "")
        except Exception as exc:
            logger.exception("Unhandled error in /v2/translate")
            return internal_error(exc)
        return outcome_response(outcome, outcome.to_v2())

    return api

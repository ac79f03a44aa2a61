"""Access-token checks for the translate routes.

When ``security.token`` is configured, every translate route requires the
caller to present it in one of these forms:

- query string:  ``?token=<token>``
- header:        ``Authorization: Bearer <token>``
- header:        ``Authorization: DeepL-Auth-Key <token>``
- header:        ``Authorization: <token>`` (a single word, no scheme)

A two-word header with any other scheme contributes no token.  With no
token configured the check is a no-op.
"""

from __future__ import annotations

import hmac

from fastapi import HTTPException, Request

from deeplx_relay.translation.models import MSG_INVALID_TOKEN

ACCEPTED_SCHEMES = ("Bearer", "DeepL-Auth-Key")


def extract_header_token(authorization: str | None) -> str:
    """Pull the token out of an ``Authorization`` header value."""
    if not authorization:
        return ""
    parts = authorization.split(" ")
    if len(parts) == 2:
        scheme, value = parts
        return value if scheme in ACCEPTED_SCHEMES else ""
    return authorization


def _matches(candidate: str | None, expected: str) -> bool:
    if not candidate:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def is_authorized(expected_token: str, *, query_token: str | None, authorization: str | None) -> bool:
    """Return True when no token is configured or a presented token matches."""
    if not expected_token:
        return True
    header_token = extract_header_token(authorization)
    return _matches(header_token, expected_token) or _matches(query_token, expected_token)


def verify_access_token(request: Request) -> None:
    """FastAPI dependency enforcing the configured access token.

    Raises:
        HTTPException: 401 ``Invalid access token`` when the check fails.
    """
    expected = request.app.state.config.security.token
    if not is_authorized(
        expected,
        query_token=request.query_params.get("token"),
        authorization=request.headers.get("authorization"),
    ):
        raise HTTPException(status_code=401, detail=MSG_INVALID_TOKEN)

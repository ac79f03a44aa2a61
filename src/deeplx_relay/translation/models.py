"""Value types passed between the builder, interpreter, and orchestrator.

Every object here is created fresh for one translation call and dropped
when the call completes.  None of them is cached or shared across
requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ── Wire constants ────────────────────────────────────────────────────────────

JSONRPC_VERSION = "2.0"
RPC_METHOD = "LMT_handle_texts"
SPLITTING_MODE = "newlines"
REQUESTED_ALTERNATIVES = 3

# Tag-handling values accepted at the HTTP boundary.  ``""`` means "none".
ALLOWED_TAG_HANDLING: frozenset[str] = frozenset({"", "html", "xml"})

METHOD_FREE = "Free"
METHOD_PRO = "Pro"

# Cookie that carries the Pro account session, inbound and outbound.
SESSION_COOKIE = "dl_session"

# ── Outcome messages (surfaced to callers unmodified) ─────────────────────────

MSG_NO_TEXT = "No text to translate"
MSG_TRANSLATION_FAILED = "Translation failed"
MSG_RATE_LIMITED = (
    "Too many requests, your IP has been blocked by DeepL temporarily, "
    "please don't request it frequently in a short time"
)
MSG_INVALID_TAG_HANDLING = "Invalid tag_handling value. Allowed values are 'html' and 'xml'."
MSG_INVALID_PAYLOAD = "Invalid request payload"
MSG_INVALID_TOKEN = "Invalid access token"
MSG_NO_SESSION = "No dl_session Found"
MSG_NOT_PRO = (
    "Your account is not a Pro account. "
    "Please upgrade your account or switch to a different account."
)
MSG_PATH_NOT_FOUND = "Path not found"
MSG_INTERNAL_ERROR = "Internal server error"


def method_for(dl_session: str) -> str:
    """Return ``"Pro"`` when a session credential was supplied, else ``"Free"``."""
    return METHOD_PRO if dl_session else METHOD_FREE


@dataclass(frozen=True)
class TranslationRequestSpec:
    """Caller parameters for one translation.

    Attributes:
        source_lang:  Source language code; ``""`` or ``"auto"`` mean
                      "let the relay decide".
        target_lang:  Target language code, forwarded as given.
        text:         Text to translate.  Multi-line text is sent as one
                      item; the backend splits on newlines.
        tag_handling: ``""``, ``"html"`` or ``"xml"``.  Checked at the HTTP
                      boundary; not part of the outbound payload.
        dl_session:   Pro session cookie value; ``""`` for free mode.
    """

    source_lang: str
    target_lang: str
    text: str
    tag_handling: str = ""
    dl_session: str = ""

    @property
    def method(self) -> str:
        return method_for(self.dl_session)


@dataclass(frozen=True)
class RequestFingerprint:
    """The (id, timestamp, payload) triple built for a single backend call.

    Attributes:
        id:          JSON-RPC correlation id in ``[100000, 999999]``.
        text:        The input text the payload carries.
        timestamp:   Aligned epoch-millisecond timestamp embedded in params.
        source_lang: Source language after auto/empty resolution.
        payload:     Final serialized body, whitespace perturbation applied.
    """

    id: int
    text: str
    timestamp: int
    source_lang: str
    payload: str


@dataclass
class TranslationOutcome:
    """Normalised result of one translation call.

    A single type covers both success (``code == 200``) and failure; failure
    outcomes carry ``message`` and leave ``data`` empty.

    Attributes:
        code:         HTTP-style status code.
        id:           Correlation id of the backend request, ``0`` when no
                      request was built.
        data:         Primary translated text.
        alternatives: Alternative translations in backend order.
        source_lang:  Detected (or resolved) source language.
        target_lang:  Requested target language.
        method:       ``"Free"`` or ``"Pro"``.
        message:      Human-readable failure reason, ``None`` on success.
    """

    code: int
    id: int = 0
    data: str = ""
    alternatives: list[str] = field(default_factory=list)
    source_lang: str = ""
    target_lang: str = ""
    method: str = METHOD_FREE
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.code == 200

    @classmethod
    def failure(
        cls,
        code: int,
        message: str,
        *,
        request_id: int = 0,
        source_lang: str = "",
        target_lang: str = "",
        method: str = METHOD_FREE,
    ) -> TranslationOutcome:
        """Build a failure outcome carrying ``code`` and ``message``."""
        return cls(
            code=code,
            id=request_id,
            source_lang=source_lang,
            target_lang=target_lang,
            method=method,
            message=message,
        )

    def to_response(self) -> dict[str, Any]:
        """Render the ``/translate`` and ``/v1/translate`` wire shape."""
        if not self.ok:
            return self.to_error()
        return {
            "code": self.code,
            "id": self.id,
            "data": self.data,
            "alternatives": list(self.alternatives),
            "source_lang": self.source_lang,
            "target_lang": self.target_lang,
            "method": self.method,
        }

    def to_error(self) -> dict[str, Any]:
        """Render the ``{code, message}`` failure shape."""
        return {"code": self.code, "message": self.message}

    def to_v2(self) -> dict[str, Any]:
        """Render the official-API-compatible ``/v2/translate`` shape."""
        if not self.ok:
            return self.to_error()
        return {
            "translations": [
                {"detected_source_language": self.source_lang, "text": self.data},
            ]
        }

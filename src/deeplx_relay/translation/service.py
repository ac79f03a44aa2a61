"""Relay orchestration: build → send → interpret.

``RelayOrchestrator`` is the single public entry-point for a translation.
It owns one :class:`RequestBuilder`, one :class:`JsonRpcTransport`, and one
:class:`ResponseInterpreter`, and runs every call through the same fixed
sequence::

    START ─ text empty? ──────────────────────────────► FAILED[404]
      │
      ▼
    BUILD ─► SEND ─ backend error? ─► INTERPRET_ERROR ─► FAILED[429|503]
                │
                ▼
             INTERPRET ───────────────────────────────► DONE[200|503]

Caller contract
---------------
``translate()`` always returns a
:class:`~deeplx_relay.translation.models.TranslationOutcome`.  Backend
problems of any kind (rate limiting, HTTP errors, timeouts, unusable
replies) come back as failure outcomes; they are never raised.  There is
no retry and no state carried between calls, so a single orchestrator can
be shared by every request the server handles.

Input defaults
--------------
``None`` for any optional string is treated as ``""``.  An empty source
language is resolved to the builder's placeholder; an empty tag-handling
value means "no tag handling".  ``tag_handling`` is checked against
``ALLOWED_TAG_HANDLING`` at the HTTP boundary and is not embedded in the
outbound payload.
"""

from __future__ import annotations

import logging

from deeplx_relay.config import RelayConfig
from deeplx_relay.translation.builder import RequestBuilder
from deeplx_relay.translation.config import BackendConfig
from deeplx_relay.translation.errors import BackendError
from deeplx_relay.translation.interpreter import ResponseInterpreter
from deeplx_relay.translation.models import (
    ALLOWED_TAG_HANDLING,
    MSG_NO_SESSION,
    MSG_NO_TEXT,
    MSG_NOT_PRO,
    TranslationOutcome,
    TranslationRequestSpec,
)
from deeplx_relay.translation.transport import JsonRpcTransport

logger = logging.getLogger(__name__)


def is_valid_tag_handling(value: str | None) -> bool:
    """True for ``None``, ``""``, ``"html"`` and ``"xml"``."""
    return (value or "") in ALLOWED_TAG_HANDLING


def pro_session_error(dl_session: str | None) -> str | None:
    """Return why ``dl_session`` cannot be used for a Pro call, or ``None``.

    A missing session and a dotted session (the shape of a free-account
    session) are both refused.  Callers answer 401 with the returned
    message and must not contact the backend.
    """
    if not dl_session:
        return MSG_NO_SESSION
    if "." in dl_session:
        return MSG_NOT_PRO
    return None


class RelayOrchestrator:
    """Sequences builder, transport, and interpreter for each call.

    Attributes:
        _builder:     Produces the request fingerprint.
        _transport:   Sends the payload to the backend.
        _interpreter: Turns replies and backend errors into outcomes.
    """

    def __init__(
        self,
        *,
        transport: JsonRpcTransport,
        builder: RequestBuilder | None = None,
        interpreter: ResponseInterpreter | None = None,
    ) -> None:
        self._transport = transport
        self._builder = builder or RequestBuilder()
        self._interpreter = interpreter or ResponseInterpreter()

    @classmethod
    def from_config(cls, cfg: RelayConfig) -> RelayOrchestrator:
        """Wire an orchestrator from the relay configuration."""
        backend = BackendConfig.from_settings(cfg.backend)
        logger.info(
            "RelayOrchestrator initialised (endpoint=%s, timeout=%.1fs, proxy=%s)",
            backend.endpoint,
            backend.timeout_seconds,
            "set" if backend.proxy else "none",
        )
        return cls(transport=JsonRpcTransport(backend))

    # ── Public API ────────────────────────────────────────────────────────────

    def translate(
        self,
        source_lang: str | None,
        target_lang: str | None,
        text: str | None,
        tag_handling: str | None = "",
        dl_session: str | None = "",
    ) -> TranslationOutcome:
        """Translate ``text`` and return the normalised outcome.

        Args:
            source_lang:  Source language, ``""``/``"auto"``/``None`` for
                          "let the relay decide".
            target_lang:  Target language.
            text:         Text to translate; empty → 404 outcome, no I/O.
            tag_handling: ``""``, ``"html"`` or ``"xml"``.
            dl_session:   Pro session cookie value; empty for free mode.

        Returns:
            The outcome for this call.
        """
        spec = TranslationRequestSpec(
            source_lang=source_lang or "",
            target_lang=target_lang or "",
            text=text or "",
            tag_handling=tag_handling or "",
            dl_session=dl_session or "",
        )
        return self.translate_spec(spec)

    def translate_spec(self, spec: TranslationRequestSpec) -> TranslationOutcome:
        """Run one :class:`TranslationRequestSpec` through the pipeline."""
        # ── Step 1: Empty input short-circuit ─────────────────────────────────
        if not spec.text:
            return TranslationOutcome.failure(
                404,
                MSG_NO_TEXT,
                target_lang=spec.target_lang,
                method=spec.method,
            )

        # ── Step 2: Build ─────────────────────────────────────────────────────
        fingerprint = self._builder.build(spec.source_lang, spec.target_lang, spec.text)

        # ── Step 3: Send ──────────────────────────────────────────────────────
        try:
            reply = self._transport.send(fingerprint.payload, spec.dl_session)
        except BackendError as exc:
            logger.info(
                "RelayOrchestrator: backend call id=%d failed (%s): %s",
                fingerprint.id,
                type(exc).__name__,
                exc,
            )
            return self._interpreter.interpret_error(exc, fingerprint, spec)

        # ── Step 4: Interpret ─────────────────────────────────────────────────
        outcome = self._interpreter.interpret(reply, fingerprint, spec)
        logger.debug(
            "RelayOrchestrator: id=%d -> %d (%s)", fingerprint.id, outcome.code, outcome.method
        )
        return outcome

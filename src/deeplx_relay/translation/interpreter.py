"""Backend reply interpretation.

``ResponseInterpreter`` turns whatever came back from the transport (a
decoded reply or a raised :class:`~deeplx_relay.translation.errors.BackendError`)
into a :class:`~deeplx_relay.translation.models.TranslationOutcome`.

Interpretation pipeline (applied in order)
------------------------------------------
1. **Rate limit**: a 429 from the transport becomes a 429 outcome with
   the "temporarily blocked" message.
2. **Transport failure**: every other backend exception becomes a 503
   outcome carrying the exception's message.
3. **Shape check**: a reply without a ``result`` object, or whose
   ``result.texts`` list is missing or empty, becomes 503
   ``"Translation failed"``.  A JSON-RPC ``error`` member is logged first.
4. **Primary text**: a first result without a non-empty ``text`` becomes
   the same 503.
5. **Alternatives**: up to three ``alternatives[*].text`` strings, in
   backend order.  Entries without usable text are skipped.
6. **Source language**: ``result.lang`` (the backend's detection) wins
   over the language the request was built with.

The interpreter is stateless; all call-specific context arrives through
the fingerprint and the request spec.
"""

from __future__ import annotations

import logging
from typing import Any

from deeplx_relay.translation.errors import BackendError, BackendRateLimitedError
from deeplx_relay.translation.models import (
    MSG_RATE_LIMITED,
    MSG_TRANSLATION_FAILED,
    REQUESTED_ALTERNATIVES,
    RequestFingerprint,
    TranslationOutcome,
    TranslationRequestSpec,
)

logger = logging.getLogger(__name__)


class ResponseInterpreter:
    """Maps backend replies and backend errors to outcomes.

    Attributes:
        _max_alternatives: Ceiling on alternatives copied into the outcome.
    """

    def __init__(self, *, max_alternatives: int = REQUESTED_ALTERNATIVES) -> None:
        self._max_alternatives = max_alternatives

    def interpret(
        self,
        reply: Any,
        fingerprint: RequestFingerprint,
        spec: TranslationRequestSpec,
    ) -> TranslationOutcome:
        """Interpret a decoded backend reply.

        Args:
            reply:       Decoded JSON body returned by the transport.
            fingerprint: The request this reply answers.
            spec:        Caller parameters (target language, session).

        Returns:
            A 200 outcome on success, otherwise a 503 outcome.
        """
        result = reply.get("result") if isinstance(reply, dict) else None
        if not isinstance(result, dict):
            if isinstance(reply, dict) and reply.get("error") is not None:
                logger.warning(
                    "ResponseInterpreter: backend returned error for id=%d: %r",
                    fingerprint.id,
                    reply["error"],
                )
            else:
                logger.warning(
                    "ResponseInterpreter: reply for id=%d has no result object", fingerprint.id
                )
            return self._failed(fingerprint, spec)

        texts = result.get("texts")
        if not isinstance(texts, list) or not texts:
            logger.warning("ResponseInterpreter: reply for id=%d has no texts", fingerprint.id)
            return self._failed(fingerprint, spec)

        first = texts[0] if isinstance(texts[0], dict) else {}
        main_text = first.get("text")
        if not isinstance(main_text, str) or not main_text:
            logger.warning(
                "ResponseInterpreter: first result for id=%d has no text", fingerprint.id
            )
            return self._failed(fingerprint, spec)

        detected = result.get("lang")
        source_lang = detected if isinstance(detected, str) and detected else fingerprint.source_lang

        return TranslationOutcome(
            code=200,
            id=fingerprint.id,
            data=main_text,
            alternatives=self._alternatives(first.get("alternatives")),
            source_lang=source_lang,
            target_lang=spec.target_lang,
            method=spec.method,
        )

    def interpret_error(
        self,
        exc: BackendError,
        fingerprint: RequestFingerprint,
        spec: TranslationRequestSpec,
    ) -> TranslationOutcome:
        """Interpret a transport exception.

        Returns:
            429 for rate limiting, 503 with the exception message otherwise.
        """
        if isinstance(exc, BackendRateLimitedError):
            return TranslationOutcome.failure(
                429,
                str(exc) or MSG_RATE_LIMITED,
                request_id=fingerprint.id,
                source_lang=fingerprint.source_lang,
                target_lang=spec.target_lang,
                method=spec.method,
            )
        return TranslationOutcome.failure(
            503,
            str(exc) or MSG_TRANSLATION_FAILED,
            request_id=fingerprint.id,
            source_lang=fingerprint.source_lang,
            target_lang=spec.target_lang,
            method=spec.method,
        )

    # ── Internal helpers ──────────────────────────────────────────────────────

    def _alternatives(self, raw: Any) -> list[str]:
        if not isinstance(raw, list):
            return []
        alternatives: list[str] = []
        for alt in raw:
            if len(alternatives) >= self._max_alternatives:
                break
            text = alt.get("text") if isinstance(alt, dict) else None
            if isinstance(text, str) and text:
                alternatives.append(text)
        return alternatives

    def _failed(
        self, fingerprint: RequestFingerprint, spec: TranslationRequestSpec
    ) -> TranslationOutcome:
        return TranslationOutcome.failure(
            503,
            MSG_TRANSLATION_FAILED,
            request_id=fingerprint.id,
            source_lang=fingerprint.source_lang,
            target_lang=spec.target_lang,
            method=spec.method,
        )

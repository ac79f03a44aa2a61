"""Request fingerprint construction for the DeepL web JSON-RPC endpoint.

``RequestBuilder`` turns ``(text, source_lang, target_lang)`` into the exact
body the backend's ``LMT_handle_texts`` method accepts.  The backend runs an
undocumented plausibility check on incoming bodies, so three details are
reproduced literally rather than "cleaned up":

Correlation id
--------------
A uniformly random integer in ``[100000, 999999]``.  It is the JSON-RPC
``id`` and also decides the spacing variant of the ``"method"`` field.

Timestamp alignment
-------------------
Let ``n`` be the number of lowercase ``i`` characters in the text and
``ts`` the current epoch time in milliseconds.  With ``n == 0`` the
timestamp is sent unchanged.  Otherwise, with ``r = n + 1``::

    ts' = ts - (ts % r) + r

The arithmetic is kept exactly as written; the backend validates this
quantity and any "equivalent" rewrite risks rejection.

Method-field spacing
--------------------
The compact JSON body is rewritten at the string level, once, on the
first ``"method":"`` occurrence::

    (id + 5) % 29 == 0 or (id + 3) % 13 == 0   ->  "method" : "
    otherwise                                  ->  "method": "

This must stay a substring rewrite of the serialized form.  Re-serializing
with a different separator setting would change every other colon too.

Determinism
-----------
The random source and the clock are constructor arguments.  Production
code uses ``random.Random()`` and the wall clock; tests pass a seeded
``Random`` (or a stub with ``randint``) and a fixed clock to get
byte-for-byte reproducible payloads.  A builder holds no per-request
state, so one instance can serve concurrent requests.
"""

from __future__ import annotations

import json
import logging
import random
import time
from collections.abc import Callable
from typing import Any

from deeplx_relay.translation.models import (
    JSONRPC_VERSION,
    REQUESTED_ALTERNATIVES,
    RPC_METHOD,
    SPLITTING_MODE,
    RequestFingerprint,
)

logger = logging.getLogger(__name__)

ID_MIN = 100000
ID_MAX = 999999

# Sentinel a caller sends to ask for source detection.
AUTO_SOURCE_LANG = "auto"

# Language sent when the caller asks for detection.  No detection is
# performed; the backend reports the real source language in its reply.
AUTO_SOURCE_PLACEHOLDER = "EN"

METHOD_COMPACT = '"method":"'
METHOD_SPACED_BOTH = '"method" : "'
METHOD_SPACED_AFTER = '"method": "'


def now_millis() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return time.time_ns() // 1_000_000


def count_i(text: str) -> int:
    """Number of lowercase ``i`` characters in ``text`` (case-sensitive)."""
    return text.count("i")


def generate_id(rng: random.Random) -> int:
    """Draw a correlation id uniformly from ``[ID_MIN, ID_MAX]``."""
    return rng.randint(ID_MIN, ID_MAX)


def align_timestamp(ts: int, i_count: int) -> int:
    """Apply the ``i``-count alignment to a raw millisecond timestamp."""
    if i_count == 0:
        return ts
    remainder = i_count + 1
    return ts - (ts % remainder) + remainder


def uses_wide_spacing(request_id: int) -> bool:
    """True when ``request_id`` selects the ``"method" : "`` variant."""
    return (request_id + 5) % 29 == 0 or (request_id + 3) % 13 == 0


def apply_method_spacing(request_id: int, body: str) -> str:
    """Rewrite the first compact ``"method":"`` in ``body`` per the parity rule."""
    if uses_wide_spacing(request_id):
        return body.replace(METHOD_COMPACT, METHOD_SPACED_BOTH, 1)
    return body.replace(METHOD_COMPACT, METHOD_SPACED_AFTER, 1)


def resolve_source_lang(source_lang: str) -> str:
    """Map ``""`` and ``"auto"`` to the fixed placeholder; pass others through."""
    if not source_lang or source_lang == AUTO_SOURCE_LANG:
        return AUTO_SOURCE_PLACEHOLDER
    return source_lang


def serialize_compact(post_data: dict[str, Any]) -> str:
    """Serialize without any insignificant whitespace, preserving key order.

    Non-ASCII characters are emitted as-is (not ``\\u`` escaped), matching
    what a browser's ``JSON.stringify`` produces.
    """
    return json.dumps(post_data, separators=(",", ":"), ensure_ascii=False)


class RequestBuilder:
    """Builds :class:`RequestFingerprint` objects for the backend.

    Attributes:
        _rng:   Source of correlation ids.  Anything with a
                ``randint(a, b)`` method works.
        _clock: Zero-argument callable returning epoch milliseconds.
    """

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock

    def build(self, source_lang: str, target_lang: str, text: str) -> RequestFingerprint:
        """Build the payload for one translation.

        ``text`` must be non-empty; the orchestrator short-circuits empty
        input before calling here.

        Args:
            source_lang: Caller's source language (``""``/``"auto"`` allowed).
            target_lang: Target language, forwarded unchanged.
            text:        Input text.

        Returns:
            The fingerprint carrying the final serialized payload.
        """
        resolved_source = resolve_source_lang(source_lang)
        request_id = generate_id(self._rng)
        timestamp = align_timestamp(self._clock(), count_i(text))

        post_data = {
            "jsonrpc": JSONRPC_VERSION,
            "method": RPC_METHOD,
            "id": request_id,
            "params": {
                "splitting": SPLITTING_MODE,
                "lang": {
                    "source_lang_user_selected": resolved_source,
                    "target_lang": target_lang,
                },
                "texts": [
                    {"text": text, "requestAlternatives": REQUESTED_ALTERNATIVES},
                ],
                "timestamp": timestamp,
            },
        }
        payload = apply_method_spacing(request_id, serialize_compact(post_data))

        logger.debug(
            "RequestBuilder: id=%d chars=%d wide_spacing=%s",
            request_id,
            len(text),
            uses_wide_spacing(request_id),
        )
        return RequestFingerprint(
            id=request_id,
            text=text,
            timestamp=timestamp,
            source_lang=resolved_source,
            payload=payload,
        )

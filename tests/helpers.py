"""
Test doubles shared across the suite.

Kept separate from ``conftest.py`` so test modules can import them
directly.
"""

from collections.abc import Callable
from typing import Any

from deeplx_relay.translation.builder import RequestBuilder
from deeplx_relay.translation.config import BackendConfig
from deeplx_relay.translation.transport import JsonRpcTransport
from tests.constants import FIXED_ID, FIXED_NOW_MS

# ============================================================================
# DETERMINISTIC SOURCES
# ============================================================================


class FixedRandom:
    """Stand-in for ``random.Random`` whose ``randint`` always returns one value."""

    def __init__(self, value: int) -> None:
        self.value = value
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return self.value


def fixed_clock(value: int = FIXED_NOW_MS) -> Callable[[], int]:
    """Return a clock callable frozen at ``value`` epoch milliseconds."""
    return lambda: value


def make_builder(request_id: int = FIXED_ID, now_ms: int = FIXED_NOW_MS) -> RequestBuilder:
    return RequestBuilder(rng=FixedRandom(request_id), clock=fixed_clock(now_ms))


# ============================================================================
# TRANSPORT STUB
# ============================================================================


def backend_reply(
    text: str = "你好，世界",
    *,
    alternatives: list[str] | None = None,
    lang: str | None = "EN",
) -> dict[str, Any]:
    """Build a well-formed ``LMT_handle_texts`` reply."""
    result: dict[str, Any] = {
        "texts": [
            {
                "text": text,
                "alternatives": [{"text": alt} for alt in (alternatives or [])],
            }
        ]
    }
    if lang is not None:
        result["lang"] = lang
    return {"jsonrpc": "2.0", "id": FIXED_ID, "result": result}


class StubTransport(JsonRpcTransport):
    """Transport that records every call and replays a canned reply or error."""

    def __init__(self, reply: Any = None, error: Exception | None = None) -> None:
        super().__init__(BackendConfig())
        self.reply = reply if reply is not None else backend_reply()
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def send(self, payload: str, dl_session: str = "") -> Any:
        self.calls.append((payload, dl_session))
        if self.error is not None:
            raise self.error
        return self.reply

    @property
    def last_payload(self) -> str:
        return self.calls[-1][0]

    @property
    def last_session(self) -> str:
        return self.calls[-1][1]

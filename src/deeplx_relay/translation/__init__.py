"""Request building, backend transport, and reply interpretation.

This package holds everything that touches the DeepL web JSON-RPC
protocol.  The HTTP layer in :mod:`deeplx_relay.api` only ever talks to
:class:`RelayOrchestrator`.

Package structure
-----------------
models.py       TranslationRequestSpec, RequestFingerprint,
                TranslationOutcome, wire constants and messages.
builder.py      RequestBuilder: id, timestamp alignment, compact
                serialization, method-field spacing.
config.py       BackendConfig: frozen endpoint / timeout / proxy.
transport.py    JsonRpcTransport: the one blocking HTTP call.
errors.py       BackendError hierarchy raised by the transport.
interpreter.py  ResponseInterpreter: reply or error → outcome.
service.py      RelayOrchestrator: the build → send → interpret sequence.

Typical call flow
-----------------
1. route handler validates token, tag_handling, session
2. ``orchestrator.translate(source, target, text, tag, session)``
3. RequestBuilder produces the fingerprint (id + aligned timestamp + body)
4. JsonRpcTransport posts the body
5. ResponseInterpreter normalises the reply (or the raised error)
6. route handler renders ``outcome.to_response()`` / ``to_v2()``
"""

from deeplx_relay.translation.builder import RequestBuilder
from deeplx_relay.translation.interpreter import ResponseInterpreter
from deeplx_relay.translation.models import (
    RequestFingerprint,
    TranslationOutcome,
    TranslationRequestSpec,
)
from deeplx_relay.translation.service import (
    RelayOrchestrator,
    is_valid_tag_handling,
    pro_session_error,
)
from deeplx_relay.translation.transport import JsonRpcTransport

__all__ = [
    "JsonRpcTransport",
    "RelayOrchestrator",
    "RequestBuilder",
    "RequestFingerprint",
    "ResponseInterpreter",
    "TranslationOutcome",
    "TranslationRequestSpec",
    "is_valid_tag_handling",
    "pro_session_error",
]

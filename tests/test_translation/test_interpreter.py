"""Unit tests for ResponseInterpreter."""

import pytest

from deeplx_relay.translation.errors import (
    BackendHTTPError,
    BackendRateLimitedError,
    BackendResponseError,
    BackendTransportError,
)
from deeplx_relay.translation.interpreter import ResponseInterpreter
from deeplx_relay.translation.models import (
    MSG_RATE_LIMITED,
    MSG_TRANSLATION_FAILED,
    RequestFingerprint,
    TranslationRequestSpec,
)
from tests.constants import FIXED_ID, FIXED_NOW_MS
from tests.helpers import backend_reply


@pytest.fixture
def interpreter():
    return ResponseInterpreter()


@pytest.fixture
def fingerprint():
    return RequestFingerprint(
        id=FIXED_ID,
        text="Hello World",
        timestamp=FIXED_NOW_MS,
        source_lang="EN",
        payload="{}",
    )


@pytest.fixture
def free_spec():
    return TranslationRequestSpec(source_lang="EN", target_lang="ZH", text="Hello World")


@pytest.fixture
def pro_spec():
    return TranslationRequestSpec(
        source_lang="EN", target_lang="ZH", text="Hello World", dl_session="sess"
    )


@pytest.mark.unit
class TestInterpretSuccess:
    def test_primary_text_and_metadata(self, interpreter, fingerprint, free_spec):
        outcome = interpreter.interpret(backend_reply("你好，世界"), fingerprint, free_spec)
        assert outcome.code == 200
        assert outcome.ok
        assert outcome.id == FIXED_ID
        assert outcome.data == "你好，世界"
        assert outcome.target_lang == "ZH"
        assert outcome.method == "Free"
        assert outcome.message is None

    def test_pro_method_when_session_present(self, interpreter, fingerprint, pro_spec):
        outcome = interpreter.interpret(backend_reply(), fingerprint, pro_spec)
        assert outcome.method == "Pro"

    def test_detected_language_overrides_request(self, interpreter, fingerprint, free_spec):
        outcome = interpreter.interpret(backend_reply(lang="DE"), fingerprint, free_spec)
        assert outcome.source_lang == "DE"

    def test_missing_detection_keeps_request_language(
        self, interpreter, fingerprint, free_spec
    ):
        outcome = interpreter.interpret(backend_reply(lang=None), fingerprint, free_spec)
        assert outcome.source_lang == "EN"

    def test_alternatives_in_backend_order(self, interpreter, fingerprint, free_spec):
        reply = backend_reply(alternatives=["a1", "a2"])
        outcome = interpreter.interpret(reply, fingerprint, free_spec)
        assert outcome.alternatives == ["a1", "a2"]

    def test_alternatives_capped_at_three(self, interpreter, fingerprint, free_spec):
        reply = backend_reply(alternatives=["a1", "a2", "a3", "a4", "a5"])
        outcome = interpreter.interpret(reply, fingerprint, free_spec)
        assert outcome.alternatives == ["a1", "a2", "a3"]

    def test_custom_cap(self, fingerprint, free_spec):
        reply = backend_reply(alternatives=["a1", "a2", "a3"])
        outcome = ResponseInterpreter(max_alternatives=1).interpret(reply, fingerprint, free_spec)
        assert outcome.alternatives == ["a1"]

    def test_unusable_alternatives_skipped(self, interpreter, fingerprint, free_spec):
        reply = backend_reply()
        reply["result"]["texts"][0]["alternatives"] = [
            {"text": "ok"},
            {"text": ""},
            {"nope": "x"},
            "plain string",
            {"text": 42},
            {"text": "also ok"},
        ]
        outcome = interpreter.interpret(reply, fingerprint, free_spec)
        assert outcome.alternatives == ["ok", "also ok"]

    def test_missing_alternatives_gives_empty_list(self, interpreter, fingerprint, free_spec):
        reply = backend_reply()
        del reply["result"]["texts"][0]["alternatives"]
        outcome = interpreter.interpret(reply, fingerprint, free_spec)
        assert outcome.alternatives == []


@pytest.mark.unit
class TestInterpretMalformed:
    @pytest.mark.parametrize(
        "reply",
        [
            {},
            {"result": None},
            {"result": "text"},
            {"result": {}},
            {"result": {"texts": []}},
            {"result": {"texts": "nope"}},
            {"result": {"texts": [{}]}},
            {"result": {"texts": [{"text": ""}]}},
            {"result": {"texts": ["bare"]}},
            {"error": {"code": 1042912, "message": "Too many requests"}},
        ],
    )
    def test_malformed_reply_is_translation_failed(
        self, interpreter, fingerprint, free_spec, reply
    ):
        outcome = interpreter.interpret(reply, fingerprint, free_spec)
        assert outcome.code == 503
        assert outcome.message == MSG_TRANSLATION_FAILED
        assert outcome.data == ""
        assert outcome.id == FIXED_ID

    def test_non_dict_reply(self, interpreter, fingerprint, free_spec):
        outcome = interpreter.interpret(None, fingerprint, free_spec)
        assert outcome.code == 503


@pytest.mark.unit
class TestInterpretError:
    def test_rate_limit_is_429(self, interpreter, fingerprint, free_spec):
        outcome = interpreter.interpret_error(BackendRateLimitedError(), fingerprint, free_spec)
        assert outcome.code == 429
        assert outcome.message == MSG_RATE_LIMITED

    def test_http_error_is_503_with_message(self, interpreter, fingerprint, free_spec):
        outcome = interpreter.interpret_error(BackendHTTPError(500), fingerprint, free_spec)
        assert outcome.code == 503
        assert outcome.message == "Request failed with status code 500"

    def test_transport_error_is_503(self, interpreter, fingerprint, free_spec):
        exc = BackendTransportError("timeout of 10s exceeded")
        outcome = interpreter.interpret_error(exc, fingerprint, free_spec)
        assert outcome.code == 503
        assert outcome.message == "timeout of 10s exceeded"

    def test_empty_message_falls_back(self, interpreter, fingerprint, pro_spec):
        outcome = interpreter.interpret_error(BackendResponseError(), fingerprint, pro_spec)
        assert outcome.code == 503
        assert outcome.message == MSG_TRANSLATION_FAILED
        assert outcome.method == "Pro"

    def test_error_outcome_renders_code_and_message(self, interpreter, fingerprint, free_spec):
        outcome = interpreter.interpret_error(BackendRateLimitedError(), fingerprint, free_spec)
        assert outcome.to_response() == {"code": 429, "message": MSG_RATE_LIMITED}

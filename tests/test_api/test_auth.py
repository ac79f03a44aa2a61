"""
Tests for access-token checks (deeplx_relay/api/auth.py).

Tests cover:
- Header token extraction for each accepted form
- Token comparison with and without a configured token
- The FastAPI dependency, exercised through the translate routes
"""

import pytest

from deeplx_relay.api.auth import extract_header_token, is_authorized
from tests.constants import TEST_TOKEN

# ============================================================================
# HEADER EXTRACTION
# ============================================================================


@pytest.mark.unit
class TestExtractHeaderToken:
    def test_missing_header(self):
        assert extract_header_token(None) == ""
        assert extract_header_token("") == ""

    def test_bearer_scheme(self):
        assert extract_header_token("Bearer abc") == "abc"

    def test_deepl_auth_key_scheme(self):
        assert extract_header_token("DeepL-Auth-Key abc") == "abc"

    def test_bare_token(self):
        assert extract_header_token("abc") == "abc"

    def test_unknown_scheme_contributes_nothing(self):
        assert extract_header_token("Basic abc") == ""

    def test_scheme_is_case_sensitive(self):
        assert extract_header_token("bearer abc") == ""

    def test_three_words_used_whole(self):
        assert extract_header_token("a b c") == "a b c"


# ============================================================================
# TOKEN COMPARISON
# ============================================================================


@pytest.mark.unit
class TestIsAuthorized:
    def test_no_token_configured_allows_everything(self):
        assert is_authorized("", query_token=None, authorization=None) is True
        assert is_authorized("", query_token="x", authorization="Bearer y") is True

    def test_query_token_match(self):
        assert is_authorized(TEST_TOKEN, query_token=TEST_TOKEN, authorization=None)

    def test_header_token_match(self):
        assert is_authorized(TEST_TOKEN, query_token=None, authorization=f"Bearer {TEST_TOKEN}")

    def test_either_source_suffices(self):
        assert is_authorized(TEST_TOKEN, query_token="wrong", authorization=TEST_TOKEN)
        assert is_authorized(TEST_TOKEN, query_token=TEST_TOKEN, authorization="Bearer wrong")

    def test_mismatch_rejected(self):
        assert not is_authorized(TEST_TOKEN, query_token="wrong", authorization="Bearer wrong")

    def test_nothing_presented_rejected(self):
        assert not is_authorized(TEST_TOKEN, query_token=None, authorization=None)

    def test_unknown_scheme_rejected(self):
        assert not is_authorized(
            TEST_TOKEN, query_token=None, authorization=f"Basic {TEST_TOKEN}"
        )


# ============================================================================
# DEPENDENCY (through the HTTP surface)
# ============================================================================

BODY = {"text": "Hello World", "source_lang": "EN", "target_lang": "ZH"}


@pytest.mark.api
class TestVerifyAccessToken:
    def test_missing_token_is_401(self, test_client, stub_transport):
        response = test_client.post("/translate", json=BODY)

        assert response.status_code == 401
        assert response.json() == {"code": 401, "message": "Invalid access token"}
        assert stub_transport.calls == []

    def test_wrong_token_is_401(self, test_client):
        response = test_client.post(
            "/translate", json=BODY, headers={"Authorization": "Bearer nope"}
        )
        assert response.status_code == 401

    @pytest.mark.parametrize(
        "headers",
        [
            {"Authorization": f"Bearer {TEST_TOKEN}"},
            {"Authorization": f"DeepL-Auth-Key {TEST_TOKEN}"},
            {"Authorization": TEST_TOKEN},
        ],
    )
    def test_header_forms_accepted(self, test_client, headers):
        response = test_client.post("/translate", json=BODY, headers=headers)
        assert response.status_code == 200

    def test_query_token_accepted(self, test_client):
        response = test_client.post(f"/translate?token={TEST_TOKEN}", json=BODY)
        assert response.status_code == 200

    def test_all_translate_routes_protected(self, test_client):
        cookie = {"Cookie": "dl_session=pro-session"}
        assert test_client.post("/v1/translate", json=BODY, headers=cookie).status_code == 401
        assert (
            test_client.post("/v2/translate", json={"text": "Hi", "target_lang": "DE"}).status_code
            == 401
        )

    def test_root_and_health_are_public(self, test_client):
        assert test_client.get("/").status_code == 200
        assert test_client.get("/health").status_code == 200

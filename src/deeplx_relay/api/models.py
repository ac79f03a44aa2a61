"""
Pydantic models for API requests and responses.

Request bodies are read leniently (a missing or non-JSON body is an empty
object) and then validated against these models, so a wrong field type
becomes a 400 ``Invalid request payload`` instead of FastAPI's default 422.

Response models are used for the OpenAPI schema only; handlers return
``JSONResponse`` objects built from
:class:`~deeplx_relay.translation.models.TranslationOutcome`.
"""

from pydantic import BaseModel, ConfigDict

# ============================================================================
# REQUEST MODELS (Client → Server)
# ============================================================================


class TranslateRequest(BaseModel):
    """
    Body of ``POST /translate`` and ``POST /v1/translate``.

    Attributes:
        text: Text to translate. Empty or missing yields a 404 outcome.
        source_lang: Source language code, ``"auto"`` or empty to let the relay decide.
        target_lang: Target language code.
        tag_handling: ``"html"``, ``"xml"`` or empty.
    """

    model_config = ConfigDict(extra="ignore")

    text: str | None = None
    source_lang: str | None = None
    target_lang: str | None = None
    tag_handling: str | None = None


class V2TranslateRequest(BaseModel):
    """
    Body of ``POST /v2/translate`` (official-API compatible shape).

    Attributes:
        text: A string, or a list of strings that is joined with newlines.
        target_lang: Target language; may instead come from the query string.
    """

    model_config = ConfigDict(extra="ignore")

    text: str | list[str] | None = None
    target_lang: str | None = None

    def joined_text(self) -> str:
        """Return ``text`` as a single string, joining lists with ``"\\n"``."""
        if isinstance(self.text, list):
            return "\n".join(self.text)
        return self.text or ""


# ============================================================================
# RESPONSE MODELS (Server → Client)
# ============================================================================


class ErrorResponse(BaseModel):
    """Failure body shared by every route."""

    code: int
    message: str


class TranslateResponse(BaseModel):
    """Success body of ``/translate`` and ``/v1/translate``."""

    code: int
    id: int
    data: str
    alternatives: list[str]
    source_lang: str
    target_lang: str
    method: str


class V2Translation(BaseModel):
    """One entry of a ``/v2/translate`` success body."""

    detected_source_language: str
    text: str


class V2TranslateResponse(BaseModel):
    """Success body of ``/v2/translate``."""

    translations: list[V2Translation]


class RootResponse(BaseModel):
    """Body of ``GET /``."""

    code: int
    message: str


class HealthResponse(BaseModel):
    """Body of ``GET /health``."""

    status: str
    version: str

"""
Conductor - AI Gateway Service
===============================
Translates a ``(command, text)`` pair into Gemini text output.

Flow
----
    1. Validate command → select prompt template (no network on failure).
    2. Build ``GeminiRequest`` → one content block, one text part.
    3. POST ``{base_url}/models/{model}:generateContent?key=<API_KEY>``.
    4. Non-2xx → ``RemoteApiError`` carrying the raw body.
    5. Parse reply → ``MalformedResponseError`` on bad JSON / shape.
    6. First candidate's first part → returned verbatim.

Error Model
-----------
Every failure raised from this module derives from ``AIServiceError``,
so the HTTP layer can map the whole family with a single ``except``.
There are no retries: each ``process_command`` call performs at most
one outbound request.

Concurrency
-----------
``AIService`` holds only the API key and one shared
``httpx.AsyncClient`` (connection pool).  Neither is mutated after
construction, so a single instance serves concurrent requests.

Usage:
    from conductor.src.core.ai_service import AIService
    service = AIService.from_settings(settings)
    answer = await service.process_command("summarize", slide_text)
"""

from __future__ import annotations

import json

import httpx
from pydantic import ValidationError

from conductor.config.prompt_templates import ASK_QUESTION_PROMPT_TEMPLATE, INVALID_COMMAND_MESSAGE, SUMMARIZE_PROMPT_TEMPLATE
from conductor.config.settings import Settings
from conductor.src.core.models import Command, GeminiRequest, GeminiResponse
from conductor.src.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "gemini-pro"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

_PROMPT_TEMPLATES: dict[Command, str] = {
    Command.SUMMARIZE: SUMMARIZE_PROMPT_TEMPLATE,
    Command.ASK_QUESTION: ASK_QUESTION_PROMPT_TEMPLATE,
}


# ══════════════════════════════════════════════════════════════════════
#  ERRORS
# ══════════════════════════════════════════════════════════════════════


class AIServiceError(Exception):
    """Base class for every failure surfaced by ``AIService``."""


class InvalidCommandError(AIServiceError):
    def __init__(self, command: str) -> None:
        super().__init__(INVALID_COMMAND_MESSAGE)
        self.command = command


class RemoteApiError(AIServiceError):
    """Gemini answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Gemini API error: {body}")
        self.status_code = status_code
        self.body = body


class MalformedResponseError(AIServiceError):
    """Gemini body is not JSON or does not match the expected reply shape."""


class EmptyResponseError(AIServiceError):
    def __init__(self) -> None:
        super().__init__("No response from Gemini API")


class TransportError(AIServiceError):
    """Gemini could not be reached (DNS, refused connection, timeout, ...)."""


# ══════════════════════════════════════════════════════════════════════
#  PROMPT CONSTRUCTION
# ══════════════════════════════════════════════════════════════════════


def build_prompt(command: str, text: str) -> str:
    """
    Return the final prompt for *command* applied to *text*.

    Raises
    ------
    InvalidCommandError
        If *command* is not one of the ``Command`` values.
    """
    try:
        resolved = Command(command)
    except ValueError:
        raise InvalidCommandError(command) from None
    return _PROMPT_TEMPLATES[resolved].format(text=text)


# ══════════════════════════════════════════════════════════════════════
#  AI SERVICE
# ══════════════════════════════════════════════════════════════════════


class AIService:
    """
    Gemini gateway shared by all request handlers.

    Parameters
    ----------
    api_key
        Gemini API key, sent as the ``key`` query parameter.
    client
        Shared ``httpx.AsyncClient``.  The service closes it in ``aclose``.
    model
        Model identifier placed in the ``generateContent`` path.
    base_url
        Versioned Generative Language API root.
    """

    __slots__ = ("_api_key", "_client", "_endpoint")

    def __init__(self, api_key: str, client: httpx.AsyncClient, *, model: str = DEFAULT_MODEL, base_url: str = DEFAULT_BASE_URL) -> None:
        self._api_key = api_key
        self._client = client
        self._endpoint = f"{base_url.rstrip('/')}/models/{model}:generateContent"


    @classmethod
    def from_settings(cls, app_settings: Settings) -> AIService:
        """Build a service and its connection pool from application settings."""
        client = httpx.AsyncClient(timeout=httpx.Timeout(app_settings.REQUEST_TIMEOUT_SECONDS))
        logger.info("[GEMINI] Client initialised: model=%s, timeout=%.1fs", app_settings.LLM_MODEL, app_settings.REQUEST_TIMEOUT_SECONDS)
        return cls(app_settings.GEMINI_API_KEY.get_secret_value(), client, model=app_settings.LLM_MODEL, base_url=app_settings.GEMINI_API_BASE_URL)


    @property
    def endpoint(self) -> str:
        return self._endpoint


    async def aclose(self) -> None:
        await self._client.aclose()


    async def process_command(self, command: str, text: str) -> str:
        """
        Run *command* against *text* and return Gemini's answer verbatim.

        Raises
        ------
        AIServiceError
            ``InvalidCommandError`` before any network activity, or one of
            the ``call_gemini`` failures.
        """
        prompt = build_prompt(command, text)
        return await self.call_gemini(prompt)


    async def call_gemini(self, prompt: str) -> str:
        """Send *prompt* to ``generateContent`` and unwrap the first text part."""
        # ASCII-escaped body: lone surrogates in slide text must not break UTF-8 encoding.
        body = json.dumps(GeminiRequest.from_prompt(prompt).model_dump())

        try:
            response = await self._client.post(self._endpoint, params={"key": self._api_key}, content=body, headers={"Content-Type": "application/json"})
        except httpx.HTTPError as exc:
            # Message only: the request URL carries the API key.
            logger.error("[GEMINI] Transport failure: %s", type(exc).__name__)
            raise TransportError(f"Failed to reach Gemini API: {exc}") from exc

        if not response.is_success:
            logger.warning("[GEMINI] HTTP %d from generateContent.", response.status_code)
            raise RemoteApiError(response.status_code, response.text)

        try:
            reply = GeminiResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise MalformedResponseError(f"Malformed response from Gemini API: {exc.error_count()} validation error(s)") from exc

        text = reply.first_text()
        if text is None:
            raise EmptyResponseError()

        logger.debug("[GEMINI] Reply received (%d chars).", len(text))
        return text

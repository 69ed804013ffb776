"""
Conductor - Backend Client
===========================
Async client for the Conductor HTTP API, used by dashboards and the
smoke-check script.

    async with AssistantClient("http://localhost:3000") as api:
        if await api.health_check():
            print(await api.summarize_slide(slide_text))

This module does not read application settings, so it can be used from
a machine that has no ``GEMINI_API_KEY``.
"""

from __future__ import annotations

from types import TracebackType

import httpx

from conductor.src.core.models import AIAssistRequest, Command

DEFAULT_BASE_URL = "http://localhost:3000"


class AssistantClientError(Exception):
    """The backend answered ``/ai-assist`` with a non-success status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class AssistantClient:
    """
    Thin wrapper over ``POST /ai-assist`` and ``GET /health``.

    Parameters
    ----------
    base_url
        Root URL of a running backend.
    client
        Optional pre-built ``httpx.AsyncClient``.  When omitted, one is
        created and closed by this object.
    """

    __slots__ = ("_client", "_owns_client")

    def __init__(self, base_url: str = DEFAULT_BASE_URL, client: httpx.AsyncClient | None = None) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url)


    async def __aenter__(self) -> AssistantClient:
        return self


    async def __aexit__(self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: TracebackType | None) -> None:
        await self.aclose()


    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


    async def health_check(self) -> bool:
        """Return True if the backend answers ``/health`` with a 2xx status."""
        try:
            response = await self._client.get("/health")
        except httpx.HTTPError:
            return False
        return response.is_success


    async def summarize_slide(self, slide_text: str) -> str:
        return await self._process_command(Command.SUMMARIZE, slide_text)


    async def get_audience_question(self, slide_text: str) -> str:
        return await self._process_command(Command.ASK_QUESTION, slide_text)


    async def _process_command(self, command: Command, text: str) -> str:
        body = AIAssistRequest(command=command.value, text=text)
        response = await self._client.post("/ai-assist", json=body.model_dump())

        if not response.is_success:
            raise AssistantClientError(self._error_message(response), response.status_code)

        return response.json()["result"]


    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            data = None
        message = data.get("error") if isinstance(data, dict) else None
        return message or f"HTTP error! status: {response.status_code}"

"""
Conductor - API Route Definitions
==================================
Defines the REST endpoints consumed by the conductor dashboard:
  - GET  /health     → Liveness check, plain-text ``OK``
  - POST /ai-assist  → Run a slide command and return the Gemini answer

Each route handler is a thin controller: request bodies are validated by
FastAPI, business logic is delegated to ``AIService``, and every
``AIServiceError`` is mapped to HTTP 500 with ``{"error": <message>}``.
Client-caused failures (unknown command) and remote failures share the
same status code.

The shared ``AIService`` is created by the application factory and
reaches handlers through the ``get_ai_service`` dependency.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from conductor.src.core.ai_service import AIService, AIServiceError
from conductor.src.core.models import AIAssistRequest, AIAssistResponse, ErrorResponse
from conductor.src.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def utf8_length(text: str) -> int:
    """UTF-8 byte length of *text*; lone surrogates count as three bytes."""
    return len(text.encode("utf-8", "surrogatepass"))


def get_ai_service(request: Request) -> AIService:
    """Return the process-wide ``AIService`` stored on the application state."""
    return request.app.state.ai_service


@router.get("/health", response_class=PlainTextResponse)
async def health_check() -> str:
    return "OK"


@router.post("/ai-assist", response_model=AIAssistResponse, responses={500: {"model": ErrorResponse}})
async def ai_assist(payload: AIAssistRequest, service: AIService = Depends(get_ai_service)) -> AIAssistResponse | JSONResponse:
    logger.info("[ASSIST] Received request — command: %s, text length: %d bytes", payload.command, utf8_length(payload.text))

    try:
        result = await service.process_command(payload.command, payload.text)
    except AIServiceError as exc:
        logger.error("[ASSIST] Error processing request: %s", exc)
        return JSONResponse(ErrorResponse(error=str(exc)).model_dump(), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info("[ASSIST] Successfully processed request.")
    return AIAssistResponse(result=result)

"""
Conductor - Centralized Configuration
======================================
Uses ``pydantic-settings`` (``BaseSettings``) to load *all* configuration
from environment variables and the project-level ``.env`` file.

Security
--------
- ``GEMINI_API_KEY`` is typed as ``SecretStr`` and has **no default value**.
  If the key is missing at startup, Pydantic will raise a ``ValidationError``
  and the server refuses to start.  The raw value is never exposed in repr,
  logs, or tracebacks.

Networking
----------
``REQUEST_TIMEOUT_SECONDS`` bounds every outbound Gemini call.  The
HTTP listener binds to ``HOST:PORT`` (default ``0.0.0.0:3000``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application-wide settings.

    Every field is loaded from environment variables (or ``.env``).
    Fields *without* a default are **required** — the app will refuse
    to start until they are provided.

    Attributes
    ----------
    GEMINI_API_KEY : SecretStr
        API key for the Gemini ``generateContent`` endpoint.  **Required.**
        Access the raw value with ``settings.GEMINI_API_KEY.get_secret_value()``.
    HOST : str
        Interface the HTTP server binds to.
    PORT : int
        Port the HTTP server listens on.
    ENV : Literal["dev", "prod"]
        Environment mode controlling logging verbosity.
    LOG_LEVEL : str | None
        Explicit logging level name; overrides the ``ENV``-derived level.
    LLM_MODEL : str
        Model identifier placed in the ``generateContent`` path.
    GEMINI_API_BASE_URL : str
        Versioned base URL of the Generative Language API.
    REQUEST_TIMEOUT_SECONDS : float
        Upper bound for a single outbound call.
    CORS_ORIGINS : list[str]
        Origins allowed by the CORS middleware.
    """

    # ── Environment Mode ───────────────────────────────────────────────
    ENV: Literal["dev", "prod"] = "dev"
    LOG_LEVEL: str | None = None

    # ── API Keys (REQUIRED — no default) ───────────────────────────────
    GEMINI_API_KEY: SecretStr

    # ── HTTP Server ────────────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: list[str] = ["*"]

    # ── Model Configuration ────────────────────────────────────────────
    LLM_MODEL: str = "gemini-pro"
    GEMINI_API_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    REQUEST_TIMEOUT_SECONDS: float = 60.0

    # ── Validators ─────────────────────────────────────────────────────

    @field_validator("PORT")
    @classmethod
    def _port_range(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError(f"PORT must be 1–65535, got {v}")
        return v


    @field_validator("REQUEST_TIMEOUT_SECONDS")
    @classmethod
    def _timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"REQUEST_TIMEOUT_SECONDS must be > 0, got {v}")
        return v


    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_level(cls, v: str | None) -> str | None:
        if v is None:
            return v
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {v!r}")
        return level

    # ── Pydantic Settings Configuration ────────────────────────────────
    model_config = SettingsConfigDict(env_file=Path(__file__).resolve().parent.parent.parent / ".env", env_file_encoding="utf-8", extra="ignore")


# ── Singleton Instance ─────────────────────────────────────────────────
# Import this throughout the project:
#     from conductor.config.settings import settings
settings = Settings()

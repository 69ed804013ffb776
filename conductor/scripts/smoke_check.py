"""
Conductor - Backend Smoke Check
================================
Exercises a running backend end-to-end:
    1. ``GET /health`` — abort if the backend is down.
    2. ``summarize`` on the sample slide text.
    3. ``ask-question`` on the same text.
    4. Print a short summary with timings.

Exit status is 1 if the backend is unhealthy or any command fails.

Usage:
    python -m conductor.scripts.smoke_check
    python -m conductor.scripts.smoke_check --base-url http://localhost:8080 --text "Q3 revenue grew 12%"
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path

# ── Ensure project root is importable when run directly ────────────────
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from conductor.src.api.client import DEFAULT_BASE_URL, AssistantClient, AssistantClientError  # noqa: E402

_SAMPLE_TEXT = "Quarterly results: revenue grew 12% year over year, driven by the new subscription tier. Churn fell to 3%."


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="smoke_check", description="Conductor — Check a running backend with both slide commands.")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help=f"Backend root URL (default: {DEFAULT_BASE_URL}).")
    parser.add_argument("--text", default=_SAMPLE_TEXT, help="Slide text to send.")
    return parser.parse_args(argv)


async def _run(base_url: str, text: str) -> int:
    async with AssistantClient(base_url) as api:
        if not await api.health_check():
            print(f"[FAIL] Backend at {base_url} is not healthy.")
            return 1
        print(f"[OK] Backend at {base_url} is healthy.\n")

        failures = 0
        for label, call in (("summarize", api.summarize_slide), ("ask-question", api.get_audience_question)):
            t_start = time.perf_counter()
            try:
                answer = await call(text)
            except AssistantClientError as exc:
                print(f"[FAIL] {label} (HTTP {exc.status_code}): {exc}")
                failures += 1
                continue
            elapsed_ms = (time.perf_counter() - t_start) * 1000
            print(f"[OK] {label} ({elapsed_ms:.0f}ms):")
            print(f"    {answer}\n")

    return 1 if failures else 0


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    sys.exit(asyncio.run(_run(args.base_url, args.text)))


if __name__ == "__main__":
    main()

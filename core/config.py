"""
Central configuration.

Loads environment variables from the project's .env file once and exposes
them as typed constants.

Environment variables:
- SUPABASE_URL: Your Supabase project URL (required by repositories/client.py)
- SUPABASE_KEY: Your Supabase API key (use a server-side key only on the backend)
- LOG_LEVEL: Root log level (default: INFO)
- EVENT_PUBLISHER: Where sale events go: "log", "outbox" or "both" (default: log)
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# ── Supabase ──────────────────────────────────────────────
SUPABASE_URL: str | None = os.getenv("SUPABASE_URL")
SUPABASE_KEY: str | None = os.getenv("SUPABASE_KEY")

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Sale events ───────────────────────────────────────────
EVENT_PUBLISHER: str = os.getenv("EVENT_PUBLISHER", "log").lower()

_EVENT_PUBLISHER_CHOICES = {"log", "outbox", "both"}

if EVENT_PUBLISHER not in _EVENT_PUBLISHER_CHOICES:
    raise RuntimeError(
        f"Invalid EVENT_PUBLISHER: {EVENT_PUBLISHER!r}. "
        f"Use one of: {', '.join(sorted(_EVENT_PUBLISHER_CHOICES))}."
    )

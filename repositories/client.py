"""
Supabase client initialization.

This module contains *only* the database connection setup and exposes a single
`supabase` client object for the repository adapters to use.

Credentials come from core.config (SUPABASE_URL / SUPABASE_KEY, loaded from
.env). Importing this module without them fails fast.
"""

from __future__ import annotations

# The dependency is `supabase` (supabase-py). If your editor can't resolve it,
# install it in your environment: `pip install supabase`.
from supabase import Client, create_client  # type: ignore[import-not-found]

from core.config import SUPABASE_KEY, SUPABASE_URL

if not SUPABASE_URL:
    raise RuntimeError(
        "Missing environment variable: SUPABASE_URL. "
        "Set SUPABASE_URL to your Supabase project URL."
    )

if not SUPABASE_KEY:
    raise RuntimeError(
        "Missing environment variable: SUPABASE_KEY. "
        "Set SUPABASE_KEY to your Supabase API key."
    )

supabase: Client = create_client(SUPABASE_URL, SUPABASE_KEY)

__all__ = ["supabase"]

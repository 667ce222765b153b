"""
Destino - Supabase Client

Thread-safe singleton factory for the Supabase client used to store
game history and player settings.
"""

import logging
import time
from functools import lru_cache

from httpx import RemoteProtocolError
from supabase import Client, create_client

from src.config.settings import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Create and cache a Supabase client instance."""
    settings = get_settings()
    return create_client(settings.supabase_url, settings.supabase_anon_key)


def db_retry(fn, *args, retries=2, **kwargs):
    """Call *fn* with simple retry on transient connection errors.

    Callers that hold a manager should build it inside *fn* so a retry
    picks up the fresh client.
    """
    for attempt in range(retries + 1):
        try:
            return fn(*args, **kwargs)
        except (RemoteProtocolError, ConnectionError, OSError) as exc:
            if attempt == retries:
                raise
            logger.warning("Database call failed (%s), retrying", type(exc).__name__)
            # Clear the cached client so next call creates a fresh connection
            get_supabase_client.cache_clear()
            time.sleep(0.3)

"""
Supabase client initialization.
Single point of database connection.
"""

from supabase import create_client, Client
import asyncio
import concurrent.futures
import logging
from functools import lru_cache, wraps

from config.settings import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """Create the shared client on first use."""
    if not settings.supabase_url or not settings.supabase_credential:
        logger.error(
            "Supabase credentials not configured! "
            "Required env vars: SUPABASE_URL, SUPABASE_SERVICE_KEY (or SUPABASE_KEY). "
            f"SUPABASE_URL: {'set' if settings.supabase_url else 'MISSING'}, "
            f"SUPABASE_KEY: {'set' if settings.supabase_credential else 'MISSING'}"
        )
        raise RuntimeError("Supabase credentials not configured")

    # Schema isolation: staging may use a non-public schema
    if settings.db_schema != "public":
        from supabase.lib.client_options import ClientOptions
        return create_client(
            settings.supabase_url, settings.supabase_credential,
            options=ClientOptions(schema=settings.db_schema)
        )
    return create_client(settings.supabase_url, settings.supabase_credential)


# Dedicated bounded thread pool for DB operations, so concurrent Supabase calls
# do not exhaust the default executor.
_db_executor = concurrent.futures.ThreadPoolExecutor(
    max_workers=10,
    thread_name_prefix="supabase-db",
)


def run_sync(func):
    """
    Decorator to run synchronous Supabase operations in async context.
    Supabase Python SDK is synchronous, so we need this wrapper.
    Uses a dedicated bounded thread pool instead of the default executor.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(_db_executor, lambda: func(*args, **kwargs))
    return wrapper

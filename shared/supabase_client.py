"""
Supabase client singletons for database, auth and storage operations.
"""

import asyncio
import logging
from typing import Any, List, Optional
from supabase import create_client, Client, ClientOptions

from .config import load_settings

logger = logging.getLogger(__name__)

# Singleton instances
_supabase_client: Optional[Client] = None
_supabase_auth_client: Optional[Client] = None


def get_supabase_url() -> str:
    """Get the Supabase URL from environment variables."""
    url = load_settings().supabase_url
    if not url:
        raise ValueError("SUPABASE_URL environment variable not set")
    return url


def get_supabase_service_key() -> str:
    """Get the Supabase service key from environment variables."""
    key = load_settings().supabase_service_key
    if not key:
        raise ValueError("SUPABASE_SERVICE_KEY environment variable not set")
    return key


def get_image_bucket() -> str:
    """Get the storage bucket that holds uploaded images."""
    return load_settings().image_bucket


def get_supabase_client() -> Client:
    """
    Get the Supabase client singleton.
    Uses service role key for full database and storage access.

    Returns:
        Supabase Client instance
    """
    global _supabase_client

    if _supabase_client is None:
        _supabase_client = create_client(get_supabase_url(), get_supabase_service_key())
        logger.info("Supabase client initialized")

    return _supabase_client


def get_supabase_auth_client() -> Client:
    """
    Get the Supabase client used for password sign-up and sign-in.

    Signing a user in stores their session on the client it was called on,
    so these calls go through a separate client that never persists or
    refreshes sessions. The data client keeps its service-role credentials.

    Returns:
        Supabase Client instance for end-user auth flows
    """
    global _supabase_auth_client

    if _supabase_auth_client is None:
        options = ClientOptions(auto_refresh_token=False, persist_session=False)
        _supabase_auth_client = create_client(
            get_supabase_url(), get_supabase_service_key(), options=options
        )
        logger.info("Supabase auth client initialized")

    return _supabase_auth_client


async def run_query(query: Any) -> Any:
    """Execute a query builder without blocking the event loop."""
    return await asyncio.to_thread(query.execute)


async def gather_queries(*queries: Any) -> List[Any]:
    """Execute independent queries concurrently and wait for all of them."""
    return list(await asyncio.gather(*(run_query(q) for q in queries)))

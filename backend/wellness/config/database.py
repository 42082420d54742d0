"""
Supabase client management and dependency injection.
"""
from functools import lru_cache

from supabase import Client, create_client
from supabase.client import ClientOptions

from wellness.config.settings import get_settings


@lru_cache(maxsize=None)
def get_supabase_for(
    postgrest_client_timeout: int = 60,
    schema: str = "public",
) -> Client:
    """
    Returns a service-role Supabase client with the specified options.

    The service-role key bypasses row-level security, so this client is only
    used for server-side checks such as the ``has_role`` RPC.

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY are not set.
    """
    settings = get_settings()

    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise ValueError(
            "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set in environment variables"
        )

    options = ClientOptions(
        postgrest_client_timeout=postgrest_client_timeout,
        schema=schema,
    )
    return create_client(
        settings.supabase_url, settings.supabase_service_role_key, options=options
    )


def get_supabase() -> Client:
    """Get default Supabase client (public schema)."""
    return get_supabase_for(schema="public")

"""Supabase client initialization and session access."""

from functools import lru_cache

from supabase import Client, create_client

from app.core.config import get_settings


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """
    Get Supabase client instance (cached singleton).

    Returns:
        Supabase client configured with service role key

    Raises:
        RuntimeError: If client initialization fails
    """
    try:
        settings = get_settings()
        client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
        return client
    except Exception as e:
        raise RuntimeError(f"Failed to initialize Supabase client: {e}") from e


@lru_cache(maxsize=1)
def get_anon_supabase() -> Client:
    """
    Get the caller-side Supabase client (anon key, carries the user session).

    Raises:
        RuntimeError: If SUPABASE_ANON_KEY is missing or initialization fails
    """
    settings = get_settings()
    if not settings.SUPABASE_ANON_KEY:
        raise RuntimeError("SUPABASE_ANON_KEY not configured")
    try:
        return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
    except Exception as e:
        raise RuntimeError(f"Failed to initialize Supabase client: {e}") from e


def get_session_user_id() -> str | None:
    """Return the signed-in user's id from the caller session, or None."""
    session = get_anon_supabase().auth.get_session()
    if session and session.user:
        return str(session.user.id)
    return None


def get_session_access_token() -> str | None:
    """Return the caller session's access token, or None."""
    session = get_anon_supabase().auth.get_session()
    if session:
        return session.access_token
    return None

import logging

from supabase import Client, create_client

from edulms import config

logger = logging.getLogger(__name__)


def create_supabase() -> Client:
    """
    Build a Supabase client from the environment.

    The auth half of the client keeps the signed-in session in memory, so each
    browser session needs its own instance (see views.get_supabase).
    """
    if not config.SUPABASE_URL or not config.SUPABASE_ANON_KEY:
        raise RuntimeError(
            f"Supabase environment variables not set. "
            f"SUPABASE_URL={'set' if config.SUPABASE_URL else 'missing'}, "
            f"SUPABASE_ANON_KEY={'set' if config.SUPABASE_ANON_KEY else 'missing'}. "
            f"Checked: {config.ENV_FILES[0]} and {config.ENV_FILES[1]}"
        )

    logger.info(f"[SUPABASE] Creating client for {config.SUPABASE_URL}")
    return create_client(config.SUPABASE_URL, config.SUPABASE_ANON_KEY)

from supabase import create_client, Client

from core.config import Settings


def create_service_client(settings: Settings) -> Client:
    """Service-role client used for table reads and writes (bypasses RLS)"""
    return create_client(settings.supabase_url, settings.supabase_service_key)


def create_auth_client(settings: Settings) -> Client:
    """Anon-key client used only to verify user access tokens"""
    return create_client(settings.supabase_url, settings.supabase_anon_key)

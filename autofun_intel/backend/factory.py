from supabase import Client, create_client

from autofun_intel.backend.abstract import AbstractBackend
from autofun_intel.backend.memory import InMemoryBackend
from autofun_intel.backend.supabase import SupabaseBackend
from autofun_intel.config import config


def get_backend() -> AbstractBackend:
    """Get the backend implementation based on configuration."""
    if config.db.backend == "supabase":
        return _get_supabase_backend()
    elif config.db.backend == "memory":
        return InMemoryBackend()
    else:
        raise ValueError(f"Unsupported backend: {config.db.backend}")


def _get_supabase_backend() -> SupabaseBackend:
    """Get a Supabase backend implementation."""
    if not config.db.url or not config.db.service_key:
        raise ValueError("AUTOFUN_SUPABASE_URL and AUTOFUN_SUPABASE_SERVICE_KEY are required")
    client: Client = create_client(config.db.url, config.db.service_key)
    return SupabaseBackend(client=client)


# Create an instance
backend = get_backend()

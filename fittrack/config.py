"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All configuration is loaded from environment variables (or .env file)."""

    # --- App ---
    app_name: str = "FitTrack"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    environment: str = "development"  # development | staging | production

    # --- Supabase ---
    supabase_url: str
    supabase_anon_key: str  # public key, sent as `apikey` to Supabase Auth
    supabase_db_url: str  # direct postgres connection string for asyncpg
    supabase_jwt_secret: str  # project JWT secret used to verify access tokens
    supabase_jwt_audience: str = "authenticated"

    # --- Store ---
    store_role: str = "authenticated"  # role assumed per transaction so RLS applies
    store_pool_min_size: int = 1
    store_pool_max_size: int = 10
    store_command_timeout: float = 30.0

    # --- CORS ---
    cors_origins: list[str] = ["http://localhost:5173"]

    # --- Views ---
    weekly_window_days: int = 7
    recent_workouts_limit: int = 5

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]

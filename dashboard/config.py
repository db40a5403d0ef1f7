# dashboard/config.py

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DASHBOARD_",
        env_file=".env",
        case_sensitive=False,
    )

    # Storage
    database_url: str = "sqlite:///db.sqlite"  # file in project root

    # Listing
    items_per_page: int = 6
    invoices_path: str = "/dashboard/invoices"
    # shared by every worker so a revalidation reaches all of them
    cache_dir: str = ".cache/dashboard"

    # "today" for new invoices
    timezone: str = "UTC"

    # Session
    # no default: sessions must never be signed with a known key
    session_secret: str = Field(min_length=16)
    session_cookie_name: str = "session"
    session_expire_minutes: int = 60 * 24

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()

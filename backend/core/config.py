import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass
class Settings:
    """Application settings loaded from environment variables with safe defaults."""

    app_name: str = "ISMF Race Logger"
    env: str = "dev"
    database_url: str = "sqlite+aiosqlite:///./race_logger.db"
    log_level: str = "INFO"
    magic_link_ttl_hours: int = 24

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            env=os.getenv("ENV", cls.env),
            database_url=os.getenv("DATABASE_URL") or cls.database_url,
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            magic_link_ttl_hours=int(
                os.getenv("MAGIC_LINK_TTL_HOURS", str(cls.magic_link_ttl_hours))
            ),
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.from_env()

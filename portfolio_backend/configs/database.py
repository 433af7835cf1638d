"""
Database configuration settings.

PostgreSQL connection parameters for the async engine. POSTGRES_URL, when
set, overrides the individual parts (e.g. a managed-database DSN or a
local sqlite+aiosqlite file).

Dependencies: pydantic, pydantic_settings, sqlalchemy
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url

from portfolio_backend.configs.base import settings_config


class DatabaseSettings(BaseSettings):
    """PostgreSQL connection and pool settings."""

    model_config = settings_config("POSTGRES_")

    url: str | None = Field(default=None, description="Full SQLAlchemy URL; overrides the parts below")
    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="portfolio", description="PostgreSQL database name")
    require_ssl: bool = Field(default=False, description="Pass ssl=require to asyncpg")

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def async_database_url(self) -> URL:
        """
        SQLAlchemy URL for create_async_engine.

        URL.create escapes credentials, so passwords may contain '@' or '/'.
        """
        if self.url:
            return make_url(self.url)
        return URL.create(
            "postgresql+asyncpg",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.db,
            query={"ssl": "require"} if self.require_ssl else {},
        )

    @property
    def uses_sqlite(self) -> bool:
        return self.async_database_url.get_backend_name() == "sqlite"

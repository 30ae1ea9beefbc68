"""Application settings and configuration.

This module defines all configuration options for the Tally Stage application.
Settings are loaded from environment variables with sensible defaults.
"""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Tally Stage", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Database configuration
    database_url: str = Field(default="sqlite:///./tally.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Authenticated variant: bearer JWTs bind callers to a stable identity
    secret_key: str = Field(default="change-me", alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 30,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    require_auth: bool = Field(default=False, alias="REQUIRE_AUTH")

    # Only this identity may reset the counters; unset disables resets.
    admin_identity: str | None = Field(default=None, alias="ADMIN_IDENTITY")

    # Counter, presence and activity windows
    day_boundary_timezone: str = Field(default="UTC", alias="DAY_BOUNDARY_TIMEZONE")
    online_window_seconds: int = Field(default=30, ge=1, alias="ONLINE_WINDOW_SECONDS")
    activity_window_seconds: int = Field(default=300, ge=1, alias="ACTIVITY_WINDOW_SECONDS")
    activity_default_limit: int = Field(default=10, ge=1, alias="ACTIVITY_DEFAULT_LIMIT")
    activity_max_limit: int = Field(default=100, ge=1, alias="ACTIVITY_MAX_LIMIT")

    # Background maintenance (presence sweep, activity retention)
    maintenance_enabled: bool = Field(default=False, alias="MAINTENANCE_ENABLED")
    maintenance_interval_seconds: float = Field(
        default=60.0,
        alias="MAINTENANCE_INTERVAL_SECONDS",
    )
    presence_retention_seconds: int = Field(
        default=3600,
        ge=1,
        alias="PRESENCE_RETENTION_SECONDS",
    )
    activity_retention_seconds: int | None = Field(
        default=None,
        alias="ACTIVITY_RETENTION_SECONDS",
    )

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("day_boundary_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        """Reject zone names the tz database cannot resolve."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as err:
            raise ValueError(f"unknown timezone: {value!r}") from err
        return value

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def online_window_ms(self) -> int:
        return self.online_window_seconds * 1000

    @property
    def activity_window_ms(self) -> int:
        return self.activity_window_seconds * 1000


settings = Settings()

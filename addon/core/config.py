from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "AddOn-Core"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    DATABASE_URL: str | None = None
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "addon"

    JWT_SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30

    ROOM_CODE_LENGTH: int = 6
    ROOM_CODE_MAX_ATTEMPTS: int = 10
    MIN_PLAYERS: int = 2
    MAX_PLAYERS_LIMIT: int = 12

    POLL_INTERVAL_SECONDS: float = 3.0
    CLIENT_RETRY_BACKOFF_SECONDS: float = 0.5
    CLIENT_TIMEOUT_SECONDS: float = 5.0

    @property
    def database_uri(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


class UnitTestSettings(Settings):
    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    DATABASE_URL: str | None = "sqlite+aiosqlite:///./test.db"
    JWT_SECRET_KEY: str = "test-secret"
    POLL_INTERVAL_SECONDS: float = 0.01
    CLIENT_RETRY_BACKOFF_SECONDS: float = 0.0


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_test_settings() -> UnitTestSettings:
    return UnitTestSettings()


settings = get_settings()

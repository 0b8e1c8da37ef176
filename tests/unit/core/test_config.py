from addon.core.config import Settings, get_settings, get_test_settings


def test_test_settings_use_sqlite():
    test_settings = get_test_settings()

    assert test_settings.database_uri.startswith("sqlite+aiosqlite://")
    assert test_settings.POLL_INTERVAL_SECONDS < 1
    assert test_settings.CLIENT_RETRY_BACKOFF_SECONDS == 0


def test_database_uri_built_from_postgres_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    configured = Settings(
        _env_file=None,
        POSTGRES_USER="climber",
        POSTGRES_PASSWORD="secret",
        POSTGRES_HOST="db",
        POSTGRES_PORT=6543,
        POSTGRES_DB="addon",
    )

    assert (
        configured.database_uri
        == "postgresql+asyncpg://climber:secret@db:6543/addon"
    )


def test_database_url_takes_precedence():
    configured = Settings(_env_file=None, DATABASE_URL="sqlite+aiosqlite:///x.db")

    assert configured.database_uri == "sqlite+aiosqlite:///x.db"


def test_game_defaults(monkeypatch):
    for name in ("ROOM_CODE_LENGTH", "MIN_PLAYERS", "MAX_PLAYERS_LIMIT"):
        monkeypatch.delenv(name, raising=False)

    configured = Settings(_env_file=None)

    assert configured.ROOM_CODE_LENGTH == 6
    assert configured.MIN_PLAYERS == 2
    assert configured.MAX_PLAYERS_LIMIT == 12


def test_get_settings_is_cached():
    assert get_settings() is get_settings()

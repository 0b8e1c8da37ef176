import asyncio
import logging
import sys

import alembic.config
import uvicorn
from pytest import main as pytest_main

from addon.core.config import settings
from addon.db.session import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

APP_PATH = "addon.main:app"


def _run_alembic(*args: str) -> None:
    logger.info("alembic %s", " ".join(args))
    alembic.config.main(argv=list(args))


def start_dev_server() -> None:
    logger.info(
        "Serving %s on %s:%d with reload",
        settings.PROJECT_NAME,
        settings.SERVER_HOST,
        settings.SERVER_PORT,
    )
    uvicorn.run(
        APP_PATH,
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=True,
    )


def start_prod_server() -> None:
    """Serve the API without reload, logging at ``LOG_LEVEL``."""
    logger.info(
        "Serving %s on %s:%d",
        settings.PROJECT_NAME,
        settings.SERVER_HOST,
        settings.SERVER_PORT,
    )
    uvicorn.run(
        APP_PATH,
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


def run_migrations() -> None:
    _run_alembic("upgrade", "head")


def rollback_migration() -> None:
    steps = sys.argv[1] if len(sys.argv) > 1 else "1"
    _run_alembic("downgrade", f"-{steps}")


def create_migration() -> None:
    if len(sys.argv) < 2:
        logger.error("A revision message is required")
        print('Usage: migrate-create "add climbing problem grades"')
        sys.exit(1)

    _run_alembic("revision", "--autogenerate", "-m", sys.argv[1])


def initialize_db() -> None:
    logger.info("Creating game tables")
    asyncio.run(init_db())


def run_coverage() -> None:
    sys.exit(
        pytest_main(["--cov=addon", "--cov-report=term-missing", "--no-cov-on-fail"]),
    )

import os

import pytest
from dotenv import load_dotenv

# Must run before ``addon.core.config`` is imported by any test module.
load_dotenv(".env.test", override=True)


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    load_dotenv(".env.test", override=True)
    yield

    if os.path.exists(".env"):
        load_dotenv(".env", override=True)

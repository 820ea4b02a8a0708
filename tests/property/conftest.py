"""Property tests never read settings or touch the filesystem."""

import pytest


@pytest.fixture(scope="session", autouse=True)
def _isolated_settings():
    yield

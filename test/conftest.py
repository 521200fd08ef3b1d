"""Pytest config."""

from pathlib import Path

import pytest
from fakes import FakeSpawner
from fakes import RecordingSink

from ilnav.settings import VIEWER
from ilnavcommon.launcher.launcher import ViewerLauncher
from ilnavcommon.logging.logging_provider import LOGGING_PROVIDER
from ilnavcommon.settings import load_settings


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment(tmp_path_factory: pytest.TempPathFactory) -> None:
    """Load settings from the environment and log to a temporary directory."""

    load_settings()
    LOGGING_PROVIDER.init_logging(tmp_path_factory.mktemp("test_log"))
    assert VIEWER.get() is not None


# pylint: disable=redefined-outer-name
# because of fixtures


@pytest.fixture
def sink() -> RecordingSink:
    """Recording message sink."""
    return RecordingSink()


@pytest.fixture
def spawner() -> FakeSpawner:
    """Fake process spawner."""
    return FakeSpawner()


@pytest.fixture
def launcher(sink: RecordingSink, spawner: FakeSpawner) -> ViewerLauncher:
    """Launcher that does not start real processes."""
    return ViewerLauncher(Path("ilspy"), sink, spawner)

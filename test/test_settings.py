"""Test the settings framework."""

import os
from argparse import ArgumentParser
from pathlib import Path

import pytest

from ilnavcommon.gac.registry import layout_name
from ilnavcommon.logging.settings import log_level
from ilnavcommon.settings import boolean
from ilnavcommon.settings import path_list
from ilnavcommon.settings.settings import SettingsManager


@pytest.fixture(name="manager")
def fixture_manager() -> SettingsManager:
    """A settings manager independent of the global one."""
    return SettingsManager(env_prefix="ILNAVTEST_")


def test_env_and_default(manager: SettingsManager, monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables override defaults."""

    retries = manager.add("retries", int, default=3)
    name = manager.add("viewer-name", str, default="ilspy")
    monkeypatch.setenv("ILNAVTEST_RETRIES", "5")
    monkeypatch.delenv("ILNAVTEST_VIEWER_NAME", raising=False)

    manager.load()

    assert retries.get() == 5
    assert name.get() == "ilspy"
    assert manager.values == {"retries": 5, "viewer-name": "ilspy"}


def test_cli_overrides_env(manager: SettingsManager, monkeypatch: pytest.MonkeyPatch) -> None:
    """A given CLI option wins over the environment; an absent one does not reset it."""

    viewer = manager.add("viewer", Path, default=Path("ilspy"), cli_option="--viewer")
    level = manager.add("level", str, default="INFO", cli_option="--level")
    monkeypatch.setenv("ILNAVTEST_VIEWER", "/opt/ilspy/ILSpy")
    monkeypatch.setenv("ILNAVTEST_LEVEL", "DEBUG")
    parser = ArgumentParser()
    manager.add_to_cli(parser)

    manager.load(parser.parse_args(["--viewer", "/usr/bin/ilspycmd"]))

    assert viewer.get() == Path("/usr/bin/ilspycmd")
    assert level.get() == "DEBUG"


def test_missing(manager: SettingsManager, monkeypatch: pytest.MonkeyPatch) -> None:
    """A required setting without value names its environment variable."""

    manager.add("viewer", Path)
    monkeypatch.delenv("ILNAVTEST_VIEWER", raising=False)

    with pytest.raises(RuntimeError, match="ILNAVTEST_VIEWER"):
        manager.load()


def test_invalid(manager: SettingsManager, monkeypatch: pytest.MonkeyPatch) -> None:
    """Values that do not parse are reported with the variable they came from."""

    manager.add("retries", int, default=3)
    monkeypatch.setenv("ILNAVTEST_RETRIES", "many")

    with pytest.raises(RuntimeError, match="ILNAVTEST_RETRIES"):
        manager.load()


def test_optional(manager: SettingsManager, monkeypatch: pytest.MonkeyPatch) -> None:
    """Optional settings may stay unset and are parsed as their inner type otherwise."""

    log_dir = manager.add("log-dir", Path | None)
    monkeypatch.delenv("ILNAVTEST_LOG_DIR", raising=False)
    manager.load()
    assert log_dir.get() is None

    monkeypatch.setenv("ILNAVTEST_LOG_DIR", "/var/log/ilnav")
    manager.load()
    assert log_dir.get() == Path("/var/log/ilnav")


def test_bool_setting(manager: SettingsManager, monkeypatch: pytest.MonkeyPatch) -> None:
    """Booleans are not parsed with bool()."""

    flag = manager.add("dump", bool, default=True)
    monkeypatch.setenv("ILNAVTEST_DUMP", "false")

    manager.load()

    assert flag.get() is False


def test_not_loaded(manager: SettingsManager) -> None:
    """Reading a setting before loading is an error."""

    viewer = manager.add("viewer", Path, default=Path("ilspy"))

    with pytest.raises(RuntimeError, match="never loaded"):
        viewer.get()


def test_declare_twice(manager: SettingsManager) -> None:
    """Setting names are unique."""

    manager.add("viewer", Path)

    with pytest.raises(ValueError):
        manager.add("viewer", str)


@pytest.mark.parametrize(
    "text, expected",
    [("1", True), ("True", True), ("yes", True), ("on", True), ("0", False), ("false", False), ("", False)],
)
def test_boolean(text: str, expected: bool) -> None:
    """The usual spellings are accepted."""
    assert boolean(text) is expected


def test_boolean_invalid() -> None:
    """Anything else is rejected."""
    with pytest.raises(ValueError):
        boolean("maybe")


def test_path_list() -> None:
    """Paths are separated like PATH; empty entries are skipped."""

    text = os.pathsep.join(["/usr/lib/mono/gac", "", "/opt/registry"])

    assert path_list(text) == [Path("/usr/lib/mono/gac"), Path("/opt/registry")]


def test_log_level() -> None:
    """Log levels are normalized to the names known to logging."""

    assert log_level(" debug ") == "DEBUG"
    with pytest.raises(ValueError):
        log_level("chatty")


def test_layout_name() -> None:
    """Registry layouts are checked when the setting is parsed."""

    assert layout_name("Tree") == "tree"
    with pytest.raises(ValueError, match="fusion, tree"):
        layout_name("flat")

"""Settings framework implementation."""

import os
import typing
from argparse import ArgumentParser
from argparse import Namespace
from pathlib import Path
from types import NoneType
from types import UnionType
from typing import Any
from typing import Callable
from typing import Generic
from typing import Iterator
from typing import TypeVar

T = TypeVar("T")

SettingType = type[T] | UnionType | Callable[[str], T]

ENV_PREFIX = "ILNAV_"


def path_list(text: str) -> list[Path]:
    "Parse an os.pathsep separated list of paths, skipping empty entries."
    return [Path(part) for part in text.split(os.pathsep) if part.strip()]


def boolean(text: str) -> bool:
    "Parse the usual spellings of a boolean flag."
    value = text.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"Not a boolean: {text!r}")


class Setting(Generic[T]):
    """
    A single setting.

    manager: The SettingsManager this setting belongs to.

    See the module-level setting() for descriptions of the other parameters.
    """

    def __init__(
        self,
        manager: "SettingsManager",
        name: str,
        type: SettingType[T],  # pylint: disable=W0622
        *,
        env_name: str | None = None,
        cli_option: str | list[str] | None = None,
        description: str | None = None,
        default: T | None = None,
    ):
        if isinstance(cli_option, str):
            cli_option = [cli_option]
        self.manager = manager
        self.name = name
        self.type = type
        self.env_name = env_name or f"{manager.env_prefix}{name.upper().replace('-', '_')}"
        self.cli_option = cli_option
        self.description = description
        self.default = default
        self.value = default
        self._is_optional = typing.get_origin(type) is UnionType and NoneType in typing.get_args(type)

    @property
    def _parser(self) -> Callable[[str], T]:
        """
        A callable parsing non-None values of this setting.

        Optionals are unwrapped to their single enclosed type, and bool is replaced by boolean() since bool("false")
        is True.
        """
        tp: Any = self.type
        if typing.get_origin(tp) is UnionType:
            subtypes = [t for t in typing.get_args(tp) if t is not NoneType]
            if not subtypes:
                raise RuntimeError(f"Setting {self.name!r} cannot be set?!")
            if len(subtypes) == 1:
                tp = subtypes[0]
        if tp is bool:
            return boolean  # type: ignore
        assert callable(tp), f"Setting type {tp} cannot be used to parse strings"
        return tp

    @property
    def _metavar(self) -> str:
        "A short upper-case name of this setting's type for --help."
        parser = self._parser
        return f"<{getattr(parser, '__name__', str(parser)).upper()}>"

    @property
    def present(self) -> bool:
        "Whether the setting has a usable value."
        return self.value is not None or self._is_optional

    def get(self) -> T:
        "Return the setting's value, or raise an error if it is missing."
        self.manager.ensure_loaded(False)
        if self.value is None and not self._is_optional:
            raise RuntimeError(f"Setting {self.name!r} absent or not loaded")
        return self.value  # type: ignore

    def parse(self, text: str) -> None:
        "Parse a string (e.g. from the environment) and use the result as value."
        self.value = self._parser(text)

    def add_to_cli(self, parser: ArgumentParser) -> None:
        "If this setting has a CLI option, add it to the given parser."
        if self.cli_option is None:
            return
        parser.add_argument(
            *self.cli_option,
            metavar=self._metavar,
            dest=f"setting-{self.name}",
            help=self.description,
            type=self._parser,
        )

    def get_from_cli(self, args: Namespace) -> None:
        "If this setting has a CLI option that was given, take its value from the parsed arguments."
        if self.cli_option is None:
            return
        value = getattr(args, f"setting-{self.name}", None)
        if value is not None:
            self.value = value


class SettingsManager:
    """
    A collection of settings with means to bulk-configure them.

    Values are taken from the environment first and from the command line second, so CLI options win.
    """

    def __init__(self, env_prefix: str = ENV_PREFIX) -> None:
        self.env_prefix = env_prefix
        self.settings: dict[str, Setting] = {}
        self.loaded = False

    def __iter__(self) -> Iterator[Setting]:
        return iter(self.settings.values())

    @property
    def values(self) -> dict[str, object]:
        "Return a dict of all settings and their current values."
        return {k: s.value for k, s in self.settings.items()}

    def _missing_error(self, s: Setting) -> Exception:
        msg = f"Missing required setting {s.name!r}"
        msg += f"\nHint: Set the environment variable {s.env_name}"
        if s.description is not None:
            msg += f"\nSetting description: {s.description}"
        return RuntimeError(msg)

    def _invalid_error(self, s: Setting, exc: BaseException) -> Exception:
        msg = f"Invalid value for setting {s.name!r} (from {s.env_name}), expected type {s.type}"
        msg += f"\nException: {type(exc).__name__}: {exc}"
        if s.description is not None:
            msg += f"\nSetting description: {s.description}"
        return RuntimeError(msg)

    def add(self, name: str, type: SettingType[T], **kwargs: Any) -> Setting[T]:  # pylint: disable=W0622
        """
        Register a new setting with this manager and return it.

        Keyword arguments are forwarded to the Setting constructor.
        """
        if name in self.settings:
            raise ValueError(f"Trying to declare setting {name!r} which already exists")
        if self.loaded:
            raise RuntimeError(f"Trying to declare setting {name!r} after settings have been loaded")
        result = Setting(self, name, type, **kwargs)
        self.settings[name] = result
        return result

    def add_to_cli(self, parser: ArgumentParser | None = None) -> None:
        "Add the CLI options of all settings to the given parser (if any)."
        if parser is not None:
            for s in self:
                s.add_to_cli(parser)

    def load(self, args: Namespace | None = None, need_all: bool = True) -> None:
        """
        Load values for all settings from the environment and (optionally) parsed CLI arguments.

        need_all: If true, raise an error if the value for a setting is missing.
        """
        for s in self:
            s.value = s.default
            env_text = os.environ.get(s.env_name)
            if env_text is not None:
                try:
                    s.parse(env_text)
                except ValueError as exc:
                    raise self._invalid_error(s, exc) from exc
            if args is not None:
                s.get_from_cli(args)
            if need_all and not s.present:
                raise self._missing_error(s)
        self.loaded = True

    def ensure_loaded(self, need_all: bool = True) -> None:
        "Raise unless load() has been called; with need_all, also check that every setting is present."
        if not self.loaded:
            # Entry points must call ilnavcommon.settings.load_settings() before settings are used.
            raise RuntimeError("ilnav settings were never loaded!")
        if need_all:
            for s in self:
                if not s.present:
                    raise self._missing_error(s)


SETTINGS = SettingsManager()


def setting(
    name: str,
    type: SettingType[T],  # pylint: disable=W0622
    *,
    env_name: str | None = None,
    cli_option: str | list[str] | None = None,
    description: str | None = None,
    default: T | None = None,
) -> Setting[T]:
    """
    Declare a setting in the global settings manager.

    name: The setting's name, must be unique.
    type: The setting's type or factory function, something callable given a string.
    env_name: Environment variable name for the setting. Default: ILNAV_ plus the upper-cased name.
    cli_option: Name (or names) of CLI options as understood by argparse add_argument().
    description: A string to help the user to determine what to set the setting to.
    default: The default value for the setting.
    """
    return SETTINGS.add(
        name,
        type,
        env_name=env_name,
        cli_option=cli_option,
        description=description,
        default=default,
    )


def init_settings(parser: ArgumentParser | None = None) -> None:
    """
    Bind the declared settings to an argparse parser.

    Must be called before parse_args(); load_settings() must be called afterwards.
    """
    SETTINGS.add_to_cli(parser)


def load_settings(args: Namespace | None = None) -> None:
    """
    Load values for all declared settings.

    args: If you have passed an ArgumentParser to init_settings(), pass its parsed arguments here.
    """
    SETTINGS.load(args)

"""
Repository for ilnav tuning knobs.

Settings are declared using setting(), bound to CLI arguments using init_settings(), and loaded from CLI arguments and
environment variables by load_settings().
By default, a setting has no corresponding CLI option, use "cli_option=" to specify one.
A setting's environment variable is derived from its name (e.g., the setting "gac-roots" is mapped to
"ILNAV_GAC_ROOTS") unless a custom name is given.

Entry points are expected to call init_settings() before parse_args() and load_settings() after it.
Settings are declared in a settings.py file of the package using them.
"""

from ilnavcommon.settings.settings import Setting
from ilnavcommon.settings.settings import boolean
from ilnavcommon.settings.settings import init_settings
from ilnavcommon.settings.settings import load_settings
from ilnavcommon.settings.settings import path_list
from ilnavcommon.settings.settings import setting

__all__ = ["init_settings", "load_settings", "setting", "Setting", "path_list", "boolean"]

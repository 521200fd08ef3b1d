"""
Settings for ilnav.

The names below are not the environment variable names: those carry an ILNAV_ prefix and use underscores, e.g.
"gac-roots" is read from ILNAV_GAC_ROOTS.
"""

# note: logging settings are defined in ilnavcommon/logging/settings.py

import os
from pathlib import Path

from ilnavcommon.gac.registry import LAYOUTS
from ilnavcommon.gac.registry import layout_name
from ilnavcommon.gac.registry import default_gac_roots
from ilnavcommon.settings import path_list
from ilnavcommon.settings import setting

VIEWER = setting(
    "viewer",
    Path,
    description="Viewer executable (ILSpy or compatible); a bare name is looked up on PATH",
    default=Path("ilspy"),
    cli_option="--viewer",
)

GAC_ROOTS = setting(
    "gac-roots",
    path_list,
    description=f"Assembly registry directories to search, separated by {os.pathsep!r}",
    default=default_gac_roots(),
    cli_option="--gac-roots",
)

GAC_LAYOUT = setting(
    "gac-layout",
    layout_name,
    description=f"Directory layout of the assembly registry, one of: {', '.join(LAYOUTS)}",
    default="fusion",
    cli_option="--gac-layout",
)

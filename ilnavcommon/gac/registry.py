"""Look up assemblies in the global assembly cache (GAC) by identity."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterable
from typing import Protocol
from typing import Sequence

from ilnav.logger import ILNAV_LOGGER

from .identity import AssemblyIdentity

log = ILNAV_LOGGER.getChild(__name__)

# processor architecture specific sub-caches; "" for caches without them (Mono)
GAC_ARCHITECTURES = ("GAC_MSIL", "GAC_32", "GAC_64", "GAC", "")
# .NET 4 prefixes the version directory with the CLR version
GAC_VERSION_PREFIXES = ("", "v4.0_")


class RegistryLayout(Protocol):
    """Directory structure of an assembly registry."""

    def candidates(self, root: Path, identity: AssemblyIdentity) -> Iterable[Path]:
        """Yield the paths at which the assembly would be stored below root, in search order."""


class FusionLayout:
    """
    Layout of the .NET and Mono GACs.

    <root>/<arch>/<name>/<prefix><version>__<token>/<name>.dll, where the token part is empty for unsigned
    assemblies.
    """

    def __init__(
        self,
        architectures: Sequence[str] = GAC_ARCHITECTURES,
        version_prefixes: Sequence[str] = GAC_VERSION_PREFIXES,
    ) -> None:
        self.architectures = architectures
        self.version_prefixes = version_prefixes

    def candidates(self, root: Path, identity: AssemblyIdentity) -> Iterable[Path]:
        file_name = f"{identity.name}.dll"
        for prefix in self.version_prefixes:
            folder = f"{prefix}{identity.version}__{identity.token_hex}"
            for arch in self.architectures:
                yield root / arch / identity.name / folder / file_name


class VersionTreeLayout:
    """
    Plain directory tree <root>/<name>/<version>/<token>/<name>.dll.

    Unsigned assemblies live directly in the version directory.
    """

    def candidates(self, root: Path, identity: AssemblyIdentity) -> Iterable[Path]:
        version_dir = root / identity.name / str(identity.version)
        if identity.public_key_token:
            yield version_dir / identity.token_hex / f"{identity.name}.dll"
        else:
            yield version_dir / f"{identity.name}.dll"


LAYOUTS: dict[str, type[FusionLayout] | type[VersionTreeLayout]] = {
    "fusion": FusionLayout,
    "tree": VersionTreeLayout,
}


def layout_name(text: str) -> str:
    "Check that text names one of the LAYOUTS (in any case) and return the name in lower case."
    name = text.strip().lower()
    if name not in LAYOUTS:
        raise ValueError(f"Unknown registry layout {text!r}, expected one of {', '.join(LAYOUTS)}")
    return name


def layout_by_name(name: str) -> RegistryLayout:
    """Instantiate one of the LAYOUTS."""
    return LAYOUTS[layout_name(name)]()


def default_gac_roots() -> list[Path]:
    """GAC locations of the current platform."""
    if sys.platform == "win32":
        windir = Path(os.environ.get("WINDIR", r"C:\Windows"))
        return [windir / "assembly", windir / "Microsoft.NET" / "assembly"]
    return [Path("/usr/lib/mono/gac"), Path("/usr/local/lib/mono/gac")]


class AssemblyRegistry:
    """
    Read-only view of one or more assembly registry roots.

    Every lookup queries the file system again; nothing is cached because builds and installs may change the
    registry at any time.
    """

    def __init__(self, roots: Sequence[Path], layout: RegistryLayout | None = None) -> None:
        self.roots = list(roots)
        self.layout = layout or FusionLayout()

    def find_assembly(self, identity: AssemblyIdentity) -> Path | None:
        """
        Return the absolute path of the first registered file matching identity, or None.

        Name and version must match exactly. A token must match exactly; without a token only unsigned entries
        match.
        """
        for root in self.roots:
            for candidate in self.layout.candidates(root, identity):
                if candidate.is_file():
                    log.debug(f"Found {identity} at {candidate}")
                    return candidate.absolute()

        log.debug(f"{identity} is not registered in {', '.join(str(r) for r in self.roots) or '(no roots)'}")
        return None

"""
Items a user can select in the IDE to open in the viewer.

The host integration decides once which kind of item it has and hands it over as one of these models.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import NonNegativeInt
from pydantic import TypeAdapter

from ilnavcommon.gac.identity import AssemblyIdentity


class ReferenceItem(BaseModel):
    """A referenced assembly as listed under a project's references."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["reference"] = "reference"
    name: str  # assembly name, e.g. "System.Xml"
    version: str  # e.g. "4.0.0.0"
    public_key_token: str = ""  # hex; empty for unsigned assemblies
    path: Path | None = None  # where the IDE resolved the reference to

    @property
    def identity(self) -> AssemblyIdentity:
        """Identity for the registry lookup."""
        return AssemblyIdentity.parse(self.name, self.version, self.public_key_token)


class ProjectOutputItem(BaseModel):
    """The build output of a project in its active configuration."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["project"] = "project"
    project_dir: Path  # directory containing the project file
    output_path: Path  # configured output directory, usually relative, e.g. "bin/Debug"
    output_file_name: str  # e.g. "Acme.Widgets.dll"

    @property
    def assembly_path(self) -> Path:
        """Where the build puts the assembly."""
        return self.project_dir / self.output_path / self.output_file_name


class CodeItem(BaseModel):
    """A cursor position in a source document of a project."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["code"] = "code"
    document: Path
    offset: NonNegativeInt  # character offset of the cursor
    project: ProjectOutputItem  # project containing the document


SelectionItem = Annotated[ReferenceItem | ProjectOutputItem | CodeItem, Field(discriminator="kind")]

SELECTION_ADAPTER: TypeAdapter[list[SelectionItem]] = TypeAdapter(list[SelectionItem])


def parse_selection(json_text: str | bytes) -> list[SelectionItem]:
    """Parse a JSON array of selection items."""
    return SELECTION_ADAPTER.validate_json(json_text)

"""Types describing the identity of a strong-named assembly."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class InvalidPublicKeyToken(ValueError):
    """The public key token is not an even-length hex string."""


class InvalidAssemblyVersion(ValueError):
    """The version string is not a dotted version with two to four numeric components."""


def public_key_token_from_hex(text: str) -> bytes | None:
    """
    Decode a public key token as shown by the IDE (e.g. "b77a5c561934e089").

    An empty string means the assembly is not signed, which is returned as None.
    """
    text = text.strip()
    if not text:
        return None
    if len(text) % 2:
        raise InvalidPublicKeyToken(f"Public key token {text!r} has an odd number of hex digits")
    try:
        return bytes.fromhex(text)
    except ValueError as exc:
        raise InvalidPublicKeyToken(f"Public key token {text!r} is not a hex string") from exc


class AssemblyVersion(BaseModel):
    """Four part assembly version (major.minor.build.revision)."""

    model_config = ConfigDict(frozen=True)

    major: int = Field(ge=0)
    minor: int = Field(ge=0)
    build: int = Field(default=0, ge=0)
    revision: int = Field(default=0, ge=0)

    @classmethod
    def parse(cls, text: str) -> AssemblyVersion:
        """Parse "1.2", "1.2.3" or "1.2.3.4"; missing components are 0."""
        parts = text.strip().split(".")
        if not 2 <= len(parts) <= 4 or not all(p.isascii() and p.isdigit() for p in parts):
            raise InvalidAssemblyVersion(f"Invalid assembly version {text!r}")
        numbers = [int(p) for p in parts] + [0] * (4 - len(parts))
        return cls(major=numbers[0], minor=numbers[1], build=numbers[2], revision=numbers[3])

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.build}.{self.revision}"


class AssemblyIdentity(BaseModel):
    """Name, version and public key token of an assembly, as used for lookups in the GAC."""

    model_config = ConfigDict(frozen=True)

    name: str  # simple name without extension, e.g. "System.Xml"
    version: AssemblyVersion
    public_key_token: bytes | None = None  # None for unsigned assemblies

    @classmethod
    def parse(cls, name: str, version: str, public_key_token: str = "") -> AssemblyIdentity:
        """Build an identity from the strings an IDE shows for a reference."""
        return cls(
            name=name,
            version=AssemblyVersion.parse(version),
            public_key_token=public_key_token_from_hex(public_key_token),
        )

    @property
    def token_hex(self) -> str:
        """Lower-case hex representation of the token, empty for unsigned assemblies."""
        return self.public_key_token.hex() if self.public_key_token else ""

    def __str__(self) -> str:
        return f"{self.name}, Version={self.version}, PublicKeyToken={self.token_hex or 'null'}"

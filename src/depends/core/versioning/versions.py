"""NuGet version parsing and ordering."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering

_VERSION_RE = re.compile(
    r"^(?P<major>\d+)"
    r"(?:\.(?P<minor>\d+))?"
    r"(?:\.(?P<patch>\d+))?"
    r"(?:\.(?P<revision>\d+))?"
    r"(?:-(?P<release>[0-9A-Za-z\-.]+))?"
    r"(?:\+(?P<metadata>[0-9A-Za-z\-.]+))?$"
)


def _label_key(label: str) -> tuple[int, int, str]:
    # Numeric identifiers sort before alphanumeric ones (SemVer 11.4.3).
    if label.isdigit():
        return 0, int(label), ""
    return 1, 0, label.casefold()


@total_ordering
@dataclass(frozen=True, eq=False)
class NuGetVersion:
    """A parsed NuGet package version.

    Ordering compares the four numeric components, then the pre-release
    label (a release sorts above any of its pre-releases). Build metadata
    is ignored for ordering and equality, and pre-release labels compare
    case-insensitively.

    Attributes:
        major: Major component.
        minor: Minor component.
        patch: Patch component.
        revision: Fourth component, 0 when absent.
        release: Pre-release label without the leading dash, or "".
        metadata: Build metadata without the leading plus, or "".
    """

    major: int
    minor: int = 0
    patch: int = 0
    revision: int = 0
    release: str = ""
    metadata: str = field(default="")

    @classmethod
    def parse(cls, text: str) -> NuGetVersion:
        """Parse a version string such as ``1.2.3``, ``4.0.0-beta.1`` or ``1.0``.

        Raises:
            ValueError: If *text* is not a valid NuGet version.
        """
        m = _VERSION_RE.match(text.strip()) if text else None
        if not m:
            raise ValueError(f"Invalid NuGet version: {text!r}")
        return cls(
            major=int(m.group("major")),
            minor=int(m.group("minor") or 0),
            patch=int(m.group("patch") or 0),
            revision=int(m.group("revision") or 0),
            release=m.group("release") or "",
            metadata=m.group("metadata") or "",
        )

    @property
    def is_prerelease(self) -> bool:
        return bool(self.release)

    @property
    def sort_key(self) -> tuple:
        labels = tuple(_label_key(part) for part in self.release.split(".")) if self.release else ()
        return (
            self.major,
            self.minor,
            self.patch,
            self.revision,
            0 if self.release else 1,
            labels,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NuGetVersion):
            return NotImplemented
        return self.sort_key == other.sort_key

    def __lt__(self, other: NuGetVersion) -> bool:
        if not isinstance(other, NuGetVersion):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self) -> int:
        return hash(self.sort_key)

    def to_normalized_string(self) -> str:
        """Return the normalized form: three components, revision only if set."""
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.revision:
            text += f".{self.revision}"
        if self.release:
            text += f"-{self.release}"
        return text

    def __str__(self) -> str:
        return self.to_normalized_string()

    def __repr__(self) -> str:
        return f"NuGetVersion({self.to_normalized_string()!r})"

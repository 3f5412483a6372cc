"""Parsing and formatting of target framework monikers.

Accepts NuGet short folder names (``net472``, ``netstandard2.0``,
``netcoreapp3.1``, ``net6.0-windows``) and full framework names
(``.NETCoreApp,Version=v3.1``) as found in ``project.assets.json``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

NET_FRAMEWORK = ".NETFramework"
NET_STANDARD = ".NETStandard"
NET_CORE_APP = ".NETCoreApp"
ANY = "Any"

_SHORT_IDENTIFIERS: dict[str, str] = {
    "net": NET_FRAMEWORK,
    "netstandard": NET_STANDARD,
    "netcoreapp": NET_CORE_APP,
}

_LONG_TO_SHORT: dict[str, str] = {
    NET_FRAMEWORK.casefold(): "net",
    NET_STANDARD.casefold(): "netstandard",
    NET_CORE_APP.casefold(): "netcoreapp",
}

_SHORT_RE = re.compile(
    r"^(?P<name>[A-Za-z]+)(?P<version>[\d.]*)(?:-(?P<platform>.+))?$"
)
_FULL_RE = re.compile(
    r"^(?P<name>[^,]+),\s*Version=v?(?P<version>[\d.]+)(?:,\s*Profile=(?P<profile>.+))?$",
    re.IGNORECASE,
)
_GLUED_RE = re.compile(
    r"^(?P<name>\.NETFramework|\.NETStandard|\.NETCoreApp)v?(?P<version>[\d.]+)$",
    re.IGNORECASE,
)


def _parse_version(text: str) -> tuple[int, int, int, int]:
    if not text:
        return 0, 0, 0, 0
    if "." in text:
        parts = [int(p) for p in text.split(".") if p]
    else:
        # Compact folder versions: each digit is one component ("472").
        parts = [int(ch) for ch in text]
    parts = (parts + [0, 0, 0, 0])[:4]
    return parts[0], parts[1], parts[2], parts[3]


def _canonical_identifier(name: str) -> str:
    for known in (NET_FRAMEWORK, NET_STANDARD, NET_CORE_APP):
        if name.casefold() == known.casefold():
            return known
    return name


@dataclass(frozen=True)
class TargetFramework:
    """A target framework: identifier, version and optional platform.

    .NET 5 and later are represented as ``.NETCoreApp`` with major version
    5 or higher, which is how NuGet models them.

    Attributes:
        identifier: Framework identifier such as ``.NETFramework``.
        version: Four-component version tuple.
        platform: OS platform suffix (``windows``), lowercase, or "".
    """

    identifier: str
    version: tuple[int, int, int, int] = (0, 0, 0, 0)
    platform: str = ""

    @classmethod
    def parse(cls, text: str | None) -> TargetFramework:
        """Parse a short folder name or a full framework name.

        Empty text and ``any`` yield the framework-agnostic moniker.
        Unknown identifiers are kept verbatim; they are only ever
        compatible with themselves.

        Raises:
            ValueError: If *text* cannot be read as a framework at all.
        """
        stripped = (text or "").strip()
        if not stripped or stripped.casefold() in ("any", "dotnet"):
            return ANY_FRAMEWORK

        full = _FULL_RE.match(stripped)
        if full:
            name = _canonical_identifier(full.group("name").strip())
            return cls(name, _parse_version(full.group("version")))

        glued = _GLUED_RE.match(stripped)
        if glued:
            name = _canonical_identifier(glued.group("name"))
            return cls(name, _parse_version(glued.group("version")))

        short = _SHORT_RE.match(stripped)
        if not short:
            raise ValueError(f"Invalid target framework: {text!r}")

        name = short.group("name").casefold()
        version = _parse_version(short.group("version"))
        platform = (short.group("platform") or "").casefold()
        # Platform versions ("windows7.0") are not part of compatibility.
        platform = re.sub(r"[\d.]+$", "", platform)

        identifier = _SHORT_IDENTIFIERS.get(name)
        if identifier is None:
            return cls(name, version, platform)
        if identifier == NET_FRAMEWORK and version[0] >= 5:
            identifier = NET_CORE_APP
        return cls(identifier, version, platform)

    @property
    def is_any(self) -> bool:
        return self.identifier == ANY

    @property
    def is_known(self) -> bool:
        return self.identifier in (NET_FRAMEWORK, NET_STANDARD, NET_CORE_APP, ANY)

    def _version_text(self, separator: str, minimum_parts: int) -> str:
        parts = list(self.version)
        while len(parts) > minimum_parts and parts[-1] == 0:
            parts.pop()
        return separator.join(str(p) for p in parts)

    def short_folder_name(self) -> str:
        """Return the NuGet folder name, e.g. ``net472`` or ``net6.0-windows``."""
        if self.is_any:
            return "any"
        if self.identifier == NET_FRAMEWORK:
            name = "net" + self._version_text("", 2)
        elif self.identifier == NET_CORE_APP and self.version[0] >= 5:
            name = "net" + self._version_text(".", 2)
        elif self.identifier in (NET_STANDARD, NET_CORE_APP):
            name = _LONG_TO_SHORT[self.identifier.casefold()] + self._version_text(".", 2)
        else:
            name = self.identifier + (self._version_text(".", 2) if any(self.version) else "")
        if self.platform:
            name += f"-{self.platform}"
        return name

    def full_name(self) -> str:
        """Return the full name, e.g. ``.NETCoreApp,Version=v3.1``."""
        if self.is_any:
            return ANY
        return f"{self.identifier},Version=v{self._version_text('.', 2)}"

    def __str__(self) -> str:
        return self.short_folder_name()


ANY_FRAMEWORK = TargetFramework(ANY)

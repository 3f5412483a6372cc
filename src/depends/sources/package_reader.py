"""Reading ``.nupkg`` package archives.

A ``.nupkg`` is a zip file holding the nuspec manifest at its root and the
compiled assemblies under ``lib/<tfm>/``. Entries directly under ``lib/``
belong to the framework-agnostic group.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from urllib.parse import unquote

from depends.core.frameworks import ANY_FRAMEWORK, TargetFramework
from depends.core.packages import AssetGroup, PackageAssets
from depends.exceptions import MetadataSourceError
from depends.sources.nuspec import NuspecDocument, parse_nuspec

logger = logging.getLogger(__name__)


class PackageArchive:
    """Read-only view over a ``.nupkg`` archive.

    Args:
        source: Path to the archive, or its raw bytes.
    """

    def __init__(self, source: str | Path | bytes) -> None:
        if isinstance(source, bytes):
            self._label = "<memory>"
            self._data: bytes | None = source
            self._path: Path | None = None
        else:
            self._path = Path(source)
            self._label = str(self._path)
            self._data = None
        self._entries: list[str] | None = None

    def _open(self) -> zipfile.ZipFile:
        try:
            if self._data is not None:
                return zipfile.ZipFile(io.BytesIO(self._data))
            return zipfile.ZipFile(self._path)  # type: ignore[arg-type]
        except zipfile.BadZipFile as exc:
            raise MetadataSourceError(f"Not a package archive: {self._label}") from exc

    @property
    def entries(self) -> list[str]:
        """All file entries, with percent-encoding removed."""
        if self._entries is None:
            with self._open() as archive:
                self._entries = [
                    unquote(name) for name in archive.namelist() if not name.endswith("/")
                ]
        return self._entries

    def read_nuspec(self) -> NuspecDocument:
        """Parse the manifest at the archive root.

        Raises:
            MetadataSourceError: If the archive holds no nuspec.
        """
        with self._open() as archive:
            for name in archive.namelist():
                if "/" not in name and name.lower().endswith(".nuspec"):
                    return parse_nuspec(archive.read(name))
        raise MetadataSourceError(f"No nuspec found in {self._label}")

    def lib_groups(self) -> tuple[AssetGroup, ...]:
        """Group ``lib/`` entries by target framework folder."""
        groups: dict[TargetFramework, list[str]] = {}
        for entry in self.entries:
            parts = entry.split("/")
            if len(parts) < 2 or parts[0].lower() != "lib":
                continue
            if len(parts) == 2:
                framework = ANY_FRAMEWORK
            else:
                try:
                    framework = TargetFramework.parse(parts[1])
                except ValueError:
                    logger.debug("Skipping lib folder %r in %s", parts[1], self._label)
                    continue
            groups.setdefault(framework, []).append(entry)
        return tuple(AssetGroup(fw, tuple(items)) for fw, items in groups.items())

    def read_assets(self) -> PackageAssets:
        """Return lib groups plus the nuspec's framework assembly groups."""
        return PackageAssets(
            lib_groups=self.lib_groups(),
            framework_groups=self.read_nuspec().framework_assemblies,
        )

"""Reading ``project.assets.json``.

The artifact is produced by ``dotnet restore`` and is only ever read here.
Relevant layout::

    {
      "version": 3,
      "targets": {
        "net6.0": {
          "Newtonsoft.Json/12.0.3": {
            "type": "package",
            "dependencies": {"System.Memory": "4.5.4"},
            "frameworkAssemblies": ["System.Net.Http"],
            "runtime": {"lib/netstandard2.0/Newtonsoft.Json.dll": {}}
          }
        },
        "net6.0/win-x64": {...}
      }
    }

Target keys are framework full names (``.NETCoreApp,Version=v3.1``) or
short names (``net6.0``), optionally followed by ``/<runtime id>``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from depends.core.frameworks import TargetFramework
from depends.core.lockfile.models import LockFile, LockFileTarget, LockFileTargetLibrary
from depends.exceptions import LockFileError

logger = logging.getLogger(__name__)


def _parse_library(key: str, entry: dict[str, Any], path: Path) -> LockFileTargetLibrary:
    name, sep, version = key.partition("/")
    if not sep or not name or not version:
        raise LockFileError(f"{path}: invalid library key {key!r}")
    if not isinstance(entry, dict):
        raise LockFileError(f"{path}: library {key!r} must be an object")

    dependencies = entry.get("dependencies") or {}
    return LockFileTargetLibrary(
        name=name,
        version=version,
        type=str(entry.get("type", "package")),
        dependencies={str(k): str(v) for k, v in dependencies.items()},
        framework_assemblies=[str(a) for a in entry.get("frameworkAssemblies") or []],
        runtime_assemblies=[str(r) for r in entry.get("runtime") or {}],
    )


def _parse_target(key: str, libraries: Any, path: Path) -> LockFileTarget:
    framework_name, _, rid = key.partition("/")
    try:
        framework = TargetFramework.parse(framework_name)
    except ValueError as exc:
        raise LockFileError(f"{path}: invalid target {key!r}") from exc
    if not isinstance(libraries, dict):
        raise LockFileError(f"{path}: target {key!r} must be an object")

    return LockFileTarget(
        framework=framework,
        runtime_identifier=rid or None,
        libraries=[_parse_library(k, v, path) for k, v in libraries.items()],
    )


def lock_file_from_dict(data: dict[str, Any], path: Path) -> LockFile:
    """Build a ``LockFile`` from parsed JSON.

    Raises:
        LockFileError: If the structure is not a valid assets file.
    """
    targets = data.get("targets")
    if not isinstance(targets, dict):
        raise LockFileError(f"{path}: missing 'targets' section")

    lock_file = LockFile(
        path=path,
        version=int(data.get("version", 3)),
        targets=[_parse_target(k, v, path) for k, v in targets.items()],
    )
    logger.debug("Read %s with %d targets", path, len(lock_file.targets))
    return lock_file


def read_lock_file(path: str | Path) -> LockFile:
    """Read and parse a ``project.assets.json`` file.

    Raises:
        FileNotFoundError: If the file does not exist.
        LockFileError: If the file is not valid JSON or not an assets file.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8-sig")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LockFileError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise LockFileError(f"{path} must contain a JSON object")
    return lock_file_from_dict(data, path)

"""Settings for package sources, caching and discovery limits.

Settings are layered, later layers winning:

1. Built-in defaults.
2. A YAML file: the explicit path passed in, else ``$DEPENDS_CONFIG``,
   else ``depends.yaml`` in the working directory when it exists.
3. Environment variables ``DEPENDS_SOURCES`` (comma separated),
   ``DEPENDS_PACKAGES_FOLDER``, ``DEPENDS_TIMEOUT`` and
   ``DEPENDS_MAX_CONCURRENCY``.

Example ``depends.yaml``::

    sources:
      - https://api.nuget.org/v3/index.json
      - ./local-feed
    packages_folder: ~/.nuget/packages
    timeout: 30
    max_concurrency: 16
    discovery_timeout: 300
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from depends.exceptions import InvalidInputError
from depends.sources.nuget import NUGET_ORG_INDEX

CONFIG_FILE_NAME = "depends.yaml"
CONFIG_ENV_VAR = "DEPENDS_CONFIG"


def _default_packages_folder() -> Path:
    return Path.home() / ".nuget" / "packages"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration.

    Attributes:
        sources: Ordered package sources; each is a NuGet v3 index URL or
            a local directory.
        packages_folder: Cache directory for downloaded packages.
        timeout: Per-request HTTP timeout in seconds.
        max_concurrency: Upper bound on in-flight metadata queries.
        discovery_timeout: Overall limit in seconds for live discovery, or
            None for no limit.
    """

    sources: tuple[str, ...] = (NUGET_ORG_INDEX,)
    packages_folder: Path = field(default_factory=_default_packages_folder)
    timeout: float = 30.0
    max_concurrency: int = 16
    discovery_timeout: float | None = None

    def with_overrides(self, **overrides: Any) -> Settings:
        """Return a copy with the non-None *overrides* applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if "sources" in values:
            values["sources"] = tuple(values["sources"])
        return _validated(replace(self, **values))


def _validated(settings: Settings) -> Settings:
    if not settings.sources:
        raise InvalidInputError("At least one package source must be configured")
    if settings.timeout <= 0:
        raise InvalidInputError("timeout must be positive")
    if settings.max_concurrency < 1:
        raise InvalidInputError("max_concurrency must be at least 1")
    if settings.discovery_timeout is not None and settings.discovery_timeout <= 0:
        raise InvalidInputError("discovery_timeout must be positive")
    return settings


def _coerce(values: Mapping[str, Any], origin: str) -> dict[str, Any]:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise InvalidInputError(f"Unknown settings in {origin}: {', '.join(unknown)}")

    out: dict[str, Any] = {}
    try:
        if "sources" in values:
            sources = values["sources"]
            if isinstance(sources, str):
                sources = [s for s in sources.split(",")]
            out["sources"] = tuple(str(s).strip() for s in sources if str(s).strip())
        if "packages_folder" in values:
            out["packages_folder"] = Path(str(values["packages_folder"])).expanduser()
        if "timeout" in values:
            out["timeout"] = float(values["timeout"])
        if "max_concurrency" in values:
            out["max_concurrency"] = int(values["max_concurrency"])
        if values.get("discovery_timeout") is not None:
            out["discovery_timeout"] = float(values["discovery_timeout"])
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid setting in {origin}: {exc}") from exc
    return out


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise InvalidInputError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInputError(f"{path} must contain a mapping")
    return _coerce(data, str(path))


def _read_env(environ: Mapping[str, str]) -> dict[str, Any]:
    mapping = {
        "DEPENDS_SOURCES": "sources",
        "DEPENDS_PACKAGES_FOLDER": "packages_folder",
        "DEPENDS_TIMEOUT": "timeout",
        "DEPENDS_MAX_CONCURRENCY": "max_concurrency",
    }
    raw = {key: environ[var] for var, key in mapping.items() if environ.get(var)}
    return _coerce(raw, "environment")


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from defaults, a YAML file and the environment.

    Args:
        path: Explicit settings file. A missing explicit file is an error.
        environ: Environment mapping (defaults to ``os.environ``).

    Raises:
        InvalidInputError: On unreadable files, unknown keys or bad values.
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}

    config_path: Path | None = None
    if path is not None:
        config_path = Path(path)
    elif env.get(CONFIG_ENV_VAR):
        config_path = Path(env[CONFIG_ENV_VAR])
    elif Path(CONFIG_FILE_NAME).is_file():
        config_path = Path(CONFIG_FILE_NAME)

    if config_path is not None:
        if not config_path.is_file():
            raise InvalidInputError(f"Settings file not found: {config_path}")
        values.update(_read_yaml(config_path))

    values.update(_read_env(env))
    return _validated(replace(Settings(), **values))

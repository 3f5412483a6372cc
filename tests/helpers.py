"""File builders shared by the test suite.

Factories for the files the analyzers read: ``.nupkg`` archives, SDK-style
project files and restore artifacts (``project.assets.json``).
"""

from __future__ import annotations

import json
import pathlib
import zipfile
from typing import Any

NUSPEC_NS = "http://schemas.microsoft.com/packaging/2013/05/nuspec.xsd"


def build_nuspec(
    package_id: str,
    version: str,
    groups: dict[str, list[tuple[str, str]]] | None = None,
    framework_assemblies: list[tuple[str, str]] | None = None,
) -> str:
    """Return nuspec XML.

    Args:
        groups: Target framework ("" for ungrouped) -> [(id, range)].
        framework_assemblies: [(assemblyName, targetFramework)].
    """
    deps_xml = ""
    if groups:
        parts = []
        for framework, deps in groups.items():
            items = "".join(f'<dependency id="{d}" version="{r}" />' for d, r in deps)
            if framework:
                parts.append(f'<group targetFramework="{framework}">{items}</group>')
            else:
                parts.append(items)
        deps_xml = f"<dependencies>{''.join(parts)}</dependencies>"
    fa_xml = ""
    if framework_assemblies:
        items = "".join(
            f'<frameworkAssembly assemblyName="{n}" targetFramework="{t}" />'
            for n, t in framework_assemblies
        )
        fa_xml = f"<frameworkAssemblies>{items}</frameworkAssemblies>"
    return (
        f'<?xml version="1.0" encoding="utf-8"?>'
        f'<package xmlns="{NUSPEC_NS}"><metadata>'
        f"<id>{package_id}</id><version>{version}</version>"
        f"<authors>tests</authors><description>test package</description>"
        f"{deps_xml}{fa_xml}</metadata></package>"
    )


def build_nupkg(
    path: pathlib.Path,
    package_id: str,
    version: str,
    groups: dict[str, list[tuple[str, str]]] | None = None,
    lib_files: list[str] | None = None,
    framework_assemblies: list[tuple[str, str]] | None = None,
) -> pathlib.Path:
    """Write a minimal ``.nupkg`` zip to *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr(
            f"{package_id}.nuspec",
            build_nuspec(package_id, version, groups, framework_assemblies),
        )
        for entry in lib_files or []:
            archive.writestr(entry, b"MZ")
    return path


def write_project(
    directory: pathlib.Path,
    name: str = "App",
    target_framework: str = "net6.0",
    package_references: list[tuple[str, str | None]] | None = None,
    references: list[str] | None = None,
    sdk: bool = True,
    extra_properties: str = "",
) -> pathlib.Path:
    """Write a project file and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    items = []
    for package_id, version in package_references or []:
        if version is None:
            items.append(f'<PackageReference Include="{package_id}" />')
        else:
            items.append(f'<PackageReference Include="{package_id}" Version="{version}" />')
    for reference in references or []:
        items.append(f'<Reference Include="{reference}" />')
    if sdk:
        head = '<Project Sdk="Microsoft.NET.Sdk">'
        tfm = f"<TargetFramework>{target_framework}</TargetFramework>"
    else:
        head = (
            '<Project ToolsVersion="15.0" '
            'xmlns="http://schemas.microsoft.com/developer/msbuild/2003">'
        )
        tfm = "<TargetFrameworkVersion>v4.7.2</TargetFrameworkVersion>"
    text = (
        f"{head}<PropertyGroup>{tfm}{extra_properties}</PropertyGroup>"
        f"<ItemGroup>{''.join(items)}</ItemGroup></Project>"
    )
    path = directory / f"{name}.csproj"
    path.write_text(text, encoding="utf-8")
    return path


def write_assets(
    project_dir: pathlib.Path,
    targets: dict[str, dict[str, dict[str, Any]]],
) -> pathlib.Path:
    """Write ``obj/project.assets.json`` with the given ``targets`` section."""
    path = project_dir / "obj" / "project.assets.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"version": 3, "targets": targets}), encoding="utf-8")
    return path


SAMPLE_TARGETS: dict[str, dict[str, dict[str, Any]]] = {
    "net6.0": {
        "Newtonsoft.Json/12.0.3": {
            "type": "package",
            "runtime": {"lib/netstandard2.0/Newtonsoft.Json.dll": {}},
        },
        "Serilog/2.10.0": {
            "type": "package",
            "dependencies": {"System.Memory": "4.5.4"},
            "frameworkAssemblies": ["System.Net.Http"],
            "runtime": {"lib/netstandard2.1/Serilog.dll": {}},
        },
        "System.Memory/4.5.4": {
            "type": "package",
            "runtime": {"lib/netcoreapp2.1/_._": {}},
        },
        "Shared/1.0.0": {
            "type": "project",
            "dependencies": {"Newtonsoft.Json": "12.0.3"},
        },
    }
}


def flat(text: str) -> str:
    """Collapse Rich's line wrapping so CLI messages can be matched."""
    return " ".join(text.split())

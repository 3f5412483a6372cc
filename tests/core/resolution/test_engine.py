"""Tests for the live resolution engine."""

from __future__ import annotations

import asyncio

import pytest

from depends.core.frameworks import TargetFramework
from depends.core.graph import Edge, Node, NodeKind
from depends.core.packages import AssetGroup, PackageAssets
from depends.core.resolution import LiveResolutionEngine, reduce_assemblies
from depends.exceptions import UnsatisfiableConstraintsError

NET6 = TargetFramework.parse("net6.0")


def _analyze(sources, package_id="A", version="1.0.0", framework="net6.0", **kwargs):
    engine = LiveResolutionEngine(sources, **kwargs)
    return asyncio.run(engine.analyze(package_id, version, framework))


class TestReduceAssemblies:
    """Assemblies come from the nearest compatible group only."""

    def test_nearest_lib_group(self) -> None:
        assets = PackageAssets(
            lib_groups=(
                AssetGroup(TargetFramework.parse("net45"), ("lib/net45/A.dll",)),
                AssetGroup(
                    TargetFramework.parse("netstandard2.0"),
                    ("lib/netstandard2.0/A.dll", "lib/netstandard2.0/A.xml"),
                ),
            )
        )
        assert reduce_assemblies(assets, NET6) == [Node.assembly("A.dll")]

    def test_framework_assemblies_get_extension(self) -> None:
        assets = PackageAssets(
            framework_groups=(
                AssetGroup(TargetFramework.parse("net45"), ("System.Net.Http", "System.Web.dll")),
            )
        )
        nodes = reduce_assemblies(assets, TargetFramework.parse("net472"))
        assert [n.id for n in nodes] == ["System.Net.Http.dll", "System.Web.dll"]

    def test_incompatible_package_contributes_nothing(self) -> None:
        assets = PackageAssets(
            lib_groups=(AssetGroup(TargetFramework.parse("net48"), ("lib/net48/Old.dll",)),)
        )
        assert reduce_assemblies(assets, NET6) == []


class TestAnalyze:
    """End-to-end graph construction from an in-memory source."""

    def test_diamond_graph(self, diamond_source) -> None:
        graph = _analyze([diamond_source])

        assert graph.root == Node.package("A", "1.0.0")
        assert graph.root.kind is NodeKind.PACKAGE
        packages = {n.id: n.version for n in graph.nodes_of_kind(NodeKind.PACKAGE)}
        assert packages == {"A": "1.0.0", "B": "1.0.0", "C": "1.0.0", "D": "1.2.0"}

        a, b, c, d = (graph.get_node(x) for x in "ABCD")
        assert Edge(a, b, "[1.0.0, )") in graph.edges
        assert Edge(a, c, "[1.0.0, )") in graph.edges
        assert Edge(b, d, "[1.0.0, )") in graph.edges
        assert Edge(c, d, "[1.2.0, )") in graph.edges
        assert Edge(a, Node.assembly("A.dll")) in graph.edges
        assert Edge(d, Node.assembly("D.dll")) in graph.edges
        assert len(graph.edges) == 6

    def test_sources_entered_and_exited(self, diamond_source) -> None:
        _analyze([diamond_source])
        assert diamond_source.entered == 1
        assert diamond_source.exited == 1

    def test_net_framework_only_package_has_no_assemblies(self, fake_source_factory) -> None:
        source = fake_source_factory(
            {"Old/1.0.0": []}, assets={"Old/1.0.0": {"net48": ["lib/net48/Old.dll"]}}
        )
        graph = _analyze([source], "Old")
        assert graph.nodes_of_kind(NodeKind.ASSEMBLY) == []
        assert graph.nodes == frozenset({Node.package("Old", "1.0.0")})

    def test_framework_assembly_nodes(self, fake_source_factory) -> None:
        source = fake_source_factory(
            {"A/1.0.0": []},
            framework_assemblies={"A/1.0.0": {"net45": ["System.Net.Http"]}},
        )
        graph = _analyze([source], framework="net472")
        assert Node.assembly("System.Net.Http.dll") in graph.nodes

    def test_unknown_root(self, fake_source_factory) -> None:
        with pytest.raises(UnsatisfiableConstraintsError, match="could not be found"):
            _analyze([fake_source_factory({})], "Ghost")

    def test_conflict(self, fake_source_factory) -> None:
        source = fake_source_factory(
            {
                "A/1.0.0": [("B", "[1.0.0]"), ("C", "1.0.0")],
                "C/1.0.0": [("B", "[2.0.0]")],
                "B/1.0.0": [],
                "B/2.0.0": [],
            }
        )
        with pytest.raises(UnsatisfiableConstraintsError) as excinfo:
            _analyze([source])
        assert any("'B'" in message for message in excinfo.value.conflicts)

    def test_missing_dependency_version_is_no_constraint(self, fake_source_factory) -> None:
        source = fake_source_factory({"A/1.0.0": [("B", "[2.0.0]")], "B/1.0.0": []})
        graph = _analyze([source])
        assert graph.nodes == frozenset({Node.package("A", "1.0.0")})

    def test_root_version_must_match_exactly(self, fake_source_factory) -> None:
        source = fake_source_factory({"A/1.0.0": [], "A/2.0.0": []})
        graph = _analyze([source], version="2.0.0")
        assert graph.root.version == "2.0.0"

    def test_discovery_timeout(self, fake_source_factory) -> None:
        class Slow(fake_source_factory):
            async def resolve_dependencies(self, identity, framework):
                await asyncio.sleep(5)
                return await super().resolve_dependencies(identity, framework)

        with pytest.raises(asyncio.TimeoutError):
            _analyze([Slow({"A/1.0.0": []})], discovery_timeout=0.05)

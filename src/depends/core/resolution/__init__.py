"""Live package resolution: discovery, conflict resolution and assembly.

Public API::

    from depends.core.resolution import LiveResolutionEngine

    engine = LiveResolutionEngine(sources)
    graph = await engine.analyze("Newtonsoft.Json", "12.0.3", "net6.0")
"""

from depends.core.resolution.closure import PackageClosure
from depends.core.resolution.discovery import ClaimTable, TransitiveDiscovery
from depends.core.resolution.engine import LiveResolutionEngine, reduce_assemblies
from depends.core.resolution.solver import ConflictSolver, Resolution, ResolutionPolicy

__all__ = [
    "ClaimTable",
    "ConflictSolver",
    "LiveResolutionEngine",
    "PackageClosure",
    "Resolution",
    "ResolutionPolicy",
    "TransitiveDiscovery",
    "reduce_assemblies",
]

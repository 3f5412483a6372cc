"""SAT-based conflict resolution over a discovered package closure.

Encodes version selection as a Boolean satisfiability instance and uses a
CDCL solver (Glucose3 via python-sat):

- one variable per (package, version) in the closure;
- at most one version per package;
- each requirement must be met by one of its satisfying versions;
- a selected package implies one satisfying version of each dependency.

Dependencies on packages absent from the closure (no source could resolve
them) impose no constraint.

Preference between satisfying assignments is expressed with assumptions.
Packages are fixed one at a time in breadth-first order from the
requirements: a package is left out when the rest of the system allows it,
otherwise it gets the lowest (or highest) version that keeps the system
satisfiable. Under the default lowest policy a direct dependency at
``[1.0.0, )`` resolves to ``1.0.0`` unless another package needs more.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum

from pysat.solvers import Solver

from depends.core.resolution.closure import PackageClosure
from depends.core.versioning import NuGetVersion, VersionRange

logger = logging.getLogger(__name__)


class ResolutionPolicy(str, Enum):
    """Which satisfying version wins for each package."""

    LOWEST = "lowest"
    HIGHEST = "highest"


@dataclass
class Resolution:
    """Result of conflict resolution.

    Attributes:
        success: True if a consistent selection was found.
        installed: Case-folded package id -> selected version. Empty if
            resolution failed.
        conflicts: Human-readable descriptions of why resolution failed.
            Empty if resolution succeeded.
    """

    success: bool
    installed: dict[str, NuGetVersion] = field(default_factory=dict)
    conflicts: list[str] = field(default_factory=list)


class ConflictSolver:
    """Select one version per needed package from a closure.

    Args:
        closure: The candidate package versions.
        requirements: Package id -> allowed versions for the root request.
        policy: Version preference applied once constraints are met.
    """

    def __init__(
        self,
        closure: PackageClosure,
        requirements: dict[str, VersionRange],
        policy: ResolutionPolicy = ResolutionPolicy.LOWEST,
    ) -> None:
        self._closure = closure
        self._requirements = {name.casefold(): rng for name, rng in requirements.items()}
        self._names = {name.casefold(): name for name in requirements}
        self._policy = policy

    def resolve(self) -> Resolution:
        """Execute resolution.

        Returns:
            A ``Resolution``. If ``success`` is True, ``installed`` holds the
            selected versions. If False, ``conflicts`` describes the reasons.
        """
        for name, rng in self._requirements.items():
            if not self._satisfying(name, rng):
                return Resolution(success=False, conflicts=self._diagnose_failure())

        clauses, var_map, inv_map = self._encode_sat()
        if not var_map:
            return Resolution(success=True)

        solver = Solver(name="g3")
        try:
            for clause in clauses:
                solver.add_clause(clause)

            if not solver.solve():
                return Resolution(success=False, conflicts=self._diagnose_failure())

            fixed = self._fix_preferences(solver, var_map)
            installed: dict[str, NuGetVersion] = {}
            for lit in fixed:
                if lit > 0:
                    name, version = inv_map[lit]
                    installed[name] = version
            logger.debug("Selected %d of %d package versions", len(installed), len(var_map))
            return Resolution(success=True, installed=installed)
        finally:
            solver.delete()

    def _satisfying(self, name: str, rng: VersionRange) -> list[NuGetVersion]:
        return [v for v in self._closure.get_versions(name) if rng.satisfies(v)]

    def _encode_sat(
        self,
    ) -> tuple[
        list[list[int]],
        dict[tuple[str, NuGetVersion], int],
        dict[int, tuple[str, NuGetVersion]],
    ]:
        """Encode the selection problem as CNF.

        Returns:
            A tuple of (clauses, var_map, inv_map) where var_map maps
            (case-folded id, version) to a SAT variable and inv_map is its
            inverse.
        """
        closure = self._closure
        clauses: list[list[int]] = []

        var_map: dict[tuple[str, NuGetVersion], int] = {}
        inv_map: dict[int, tuple[str, NuGetVersion]] = {}
        for info in closure:
            var = len(var_map) + 1
            var_map[info.identity.key] = var
            inv_map[var] = info.identity.key

        if not var_map:
            return [], {}, {}

        package_vars: dict[str, list[int]] = defaultdict(list)
        for (name, _), var in var_map.items():
            package_vars[name].append(var)

        for vars_list in package_vars.values():
            for i in range(len(vars_list)):
                for j in range(i + 1, len(vars_list)):
                    clauses.append([-vars_list[i], -vars_list[j]])

        for name, rng in self._requirements.items():
            clauses.append([var_map[(name, v)] for v in self._satisfying(name, rng)])

        for info in closure:
            var = var_map[info.identity.key]
            for dep in info.dependencies:
                dep_name = dep.id.casefold()
                if dep_name not in package_vars:
                    continue
                satisfying = [var_map[(dep_name, v)] for v in self._satisfying(dep_name, dep.range)]
                clauses.append([-var] + satisfying)

        return clauses, var_map, inv_map

    def _preference_order(self) -> list[str]:
        """Breadth-first package order from the requirements.

        Packages unreachable from the requirements come last, by name.
        """
        closure = self._closure
        order: list[str] = []
        seen: set[str] = set()
        queue = deque(sorted(n for n in self._requirements if n in closure))
        seen.update(queue)
        while queue:
            name = queue.popleft()
            order.append(name)
            children: set[str] = set()
            for version in closure.get_versions(name):
                for dep in closure.get_dependencies(name, version):
                    children.add(dep.id.casefold())
            for child in sorted(children):
                if child in closure and child not in seen:
                    seen.add(child)
                    queue.append(child)
        order.extend(sorted(closure.package_ids - seen))
        return order

    def _fix_preferences(
        self, solver: Solver, var_map: dict[tuple[str, NuGetVersion], int]
    ) -> list[int]:
        fixed: list[int] = []
        for name in self._preference_order():
            versions = self._closure.get_versions(name)
            if self._policy is ResolutionPolicy.HIGHEST:
                versions.reverse()
            candidates = [var_map[(name, v)] for v in versions]

            excluded = [-var for var in candidates]
            if solver.solve(assumptions=fixed + excluded):
                fixed.extend(excluded)
                continue
            for var in candidates:
                if solver.solve(assumptions=fixed + [var]):
                    fixed.append(var)
                    break
        return fixed

    def _diagnose_failure(self) -> list[str]:
        """Generate human-readable conflict descriptions."""
        msgs: list[str] = []
        closure = self._closure

        for name, rng in self._requirements.items():
            versions = closure.get_versions(name)
            display = closure.display_id(self._names.get(name, name))
            if not versions:
                msgs.append(f"Package {display!r} could not be found in any source")
            elif not self._satisfying(name, rng):
                msgs.append(
                    f"No version of {display!r} satisfies {rng} "
                    f"(available: {', '.join(str(v) for v in versions)})"
                )

        for info in closure:
            for dep in info.dependencies:
                if dep.id not in closure:
                    continue
                if not self._satisfying(dep.id.casefold(), dep.range):
                    available = ", ".join(str(v) for v in closure.get_versions(dep.id))
                    msgs.append(
                        f"{info.identity} requires {dep.id} {dep.range} "
                        f"but only {available} was found"
                    )

        if not msgs:
            msgs.extend(self._disagreements())
        if not msgs:
            msgs.append(
                "Resolution failed: no consistent set of package versions exists"
            )
        return msgs

    def _disagreements(self) -> list[str]:
        """Describe packages whose requested ranges no single version meets.

        Every requester in the closure is counted, selected or not, so the
        report can name requests that a smaller selection would avoid.
        """
        closure = self._closure
        requests: dict[str, list[tuple[str, VersionRange]]] = defaultdict(list)
        for name, rng in self._requirements.items():
            requests[name].append(("the root request", rng))
        for info in closure:
            for dep in info.dependencies:
                if dep.id in closure:
                    requests[dep.id.casefold()].append((str(info.identity), dep.range))

        msgs: list[str] = []
        for name, wanted in sorted(requests.items()):
            if any(all(rng.satisfies(v) for _, rng in wanted) for v in closure.get_versions(name)):
                continue
            detail = "; ".join(f"{who} requires {rng}" for who, rng in wanted)
            msgs.append(f"Conflicting requirements on {closure.display_id(name)!r}: {detail}")
        return msgs

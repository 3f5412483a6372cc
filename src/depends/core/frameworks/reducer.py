"""Framework compatibility and nearest-framework selection."""

from __future__ import annotations

from collections.abc import Iterable

from depends.core.frameworks.moniker import (
    NET_CORE_APP,
    NET_FRAMEWORK,
    NET_STANDARD,
    TargetFramework,
)

# Highest .NET Standard version each runtime implements.
_NETFX_STANDARD_SUPPORT: tuple[tuple[tuple[int, ...], tuple[int, ...]], ...] = (
    ((4, 6, 1), (2, 0)),
    ((4, 6), (1, 3)),
    ((4, 5, 1), (1, 2)),
    ((4, 5), (1, 1)),
)
_NETCORE_STANDARD_SUPPORT: tuple[tuple[tuple[int, ...], tuple[int, ...]], ...] = (
    ((2, 1), (2, 1)),
    ((2, 0), (2, 0)),
    ((1, 0), (1, 6)),
)


def _max_standard(target: TargetFramework) -> tuple[int, ...] | None:
    if target.identifier == NET_FRAMEWORK:
        table = _NETFX_STANDARD_SUPPORT
    elif target.identifier == NET_CORE_APP:
        table = _NETCORE_STANDARD_SUPPORT
    else:
        return None
    for floor, supported in table:
        if target.version >= floor + (0,) * (4 - len(floor)):
            return supported
    return None


def is_compatible(target: TargetFramework, candidate: TargetFramework) -> bool:
    """Can a project targeting *target* consume assets built for *candidate*?

    Args:
        target: The consuming project's framework.
        candidate: The framework an asset group was built for.

    Returns:
        True if the assets are usable. .NET Framework assets are never
        usable from .NET Core or .NET 5+.
    """
    if candidate.is_any:
        return True
    if candidate.platform and candidate.platform != target.platform:
        return False
    if candidate.identifier == target.identifier:
        return candidate.version <= target.version
    if candidate.identifier == NET_STANDARD:
        supported = _max_standard(target)
        if supported is None:
            return False
        padded = supported + (0,) * (4 - len(supported))
        return candidate.version <= padded
    return False


class FrameworkReducer:
    """Select the most appropriate framework among several candidates.

    Preference order among compatible candidates:

    1. The target's own framework family, highest version first, with a
       platform-specific group ahead of a platform-neutral one.
    2. .NET Standard, highest version first.
    3. The framework-agnostic group.

    An incompatible candidate is never chosen.
    """

    def get_nearest(
        self,
        target: TargetFramework,
        candidates: Iterable[TargetFramework],
    ) -> TargetFramework | None:
        """Return the nearest compatible candidate, or None if there is none."""
        compatible = [c for c in candidates if is_compatible(target, c)]
        if not compatible:
            return None
        return max(compatible, key=lambda c: self._rank(target, c))

    @staticmethod
    def _rank(target: TargetFramework, candidate: TargetFramework) -> tuple:
        if candidate.is_any:
            family = 0
        elif candidate.identifier == target.identifier:
            family = 2
        else:
            family = 1
        return family, candidate.version, 1 if candidate.platform else 0

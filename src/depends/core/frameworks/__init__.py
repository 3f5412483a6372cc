"""Target framework monikers, compatibility and framework reduction.

Packages ship assets grouped by target framework folder (``lib/net48``,
``lib/netstandard2.0``...). Framework reduction picks the single group a
project targeting a given framework would consume.
"""

from depends.core.frameworks.moniker import ANY_FRAMEWORK, TargetFramework
from depends.core.frameworks.reducer import FrameworkReducer, is_compatible

__all__ = [
    "ANY_FRAMEWORK",
    "FrameworkReducer",
    "TargetFramework",
    "is_compatible",
]

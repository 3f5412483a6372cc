"""NuGet version and version range types.

Versions follow NuGet's extension of Semantic Versioning 2.0.0 (an
optional fourth ``revision`` component); ranges use NuGet's interval
notation.

References
----------
.. [SemVer] Preston-Werner, T. (2013). "Semantic Versioning 2.0.0."
   https://semver.org/
.. [NuGet] Microsoft. "Package versioning."
   https://learn.microsoft.com/nuget/concepts/package-versioning
"""

from depends.core.versioning.ranges import VersionRange
from depends.core.versioning.versions import NuGetVersion

__all__ = [
    "NuGetVersion",
    "VersionRange",
]

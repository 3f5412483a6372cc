"""NuGet version ranges.

Supported notation (``x`` and ``y`` are versions):

- ``x``        minimum version, inclusive (``x <= v``)
- ``[x]``      exact match (``v == x``)
- ``(x,)``     minimum version, exclusive (``x < v``)
- ``[x,y]``    inclusive range
- ``[x,y)``    inclusive minimum, exclusive maximum
- ``(,y]``     maximum version, inclusive
- ``""``/``*`` any version
"""

from __future__ import annotations

from dataclasses import dataclass

from depends.core.versioning.versions import NuGetVersion


@dataclass(frozen=True)
class VersionRange:
    """A version interval, as recorded on a package dependency.

    Attributes:
        min_version: Lower bound, or None when unbounded below.
        max_version: Upper bound, or None when unbounded above.
        include_min: Whether ``min_version`` itself satisfies the range.
        include_max: Whether ``max_version`` itself satisfies the range.
    """

    min_version: NuGetVersion | None = None
    max_version: NuGetVersion | None = None
    include_min: bool = True
    include_max: bool = False

    @classmethod
    def parse(cls, text: str | None) -> VersionRange:
        """Parse NuGet range notation.

        Raises:
            ValueError: If *text* is not a valid range.
        """
        stripped = (text or "").strip()
        if stripped in ("", "*"):
            return cls()

        if stripped[0] not in "[(":
            return cls(min_version=NuGetVersion.parse(stripped), include_min=True)

        if len(stripped) < 3 or stripped[-1] not in "])":
            raise ValueError(f"Invalid version range: {text!r}")

        include_min = stripped[0] == "["
        include_max = stripped[-1] == "]"
        inner = stripped[1:-1]
        parts = [p.strip() for p in inner.split(",")]

        if len(parts) == 1:
            # "[x]" is the only valid single-version interval.
            if not (include_min and include_max) or not parts[0]:
                raise ValueError(f"Invalid version range: {text!r}")
            exact = NuGetVersion.parse(parts[0])
            return cls(exact, exact, True, True)

        if len(parts) != 2:
            raise ValueError(f"Invalid version range: {text!r}")

        low = NuGetVersion.parse(parts[0]) if parts[0] else None
        high = NuGetVersion.parse(parts[1]) if parts[1] else None
        if low is not None and high is not None:
            if high < low or (high == low and not (include_min and include_max)):
                raise ValueError(f"Empty version range: {text!r}")

        return cls(
            min_version=low,
            max_version=high,
            include_min=include_min if low is not None else False,
            include_max=include_max if high is not None else False,
        )

    def satisfies(self, version: NuGetVersion | str) -> bool:
        """Check whether *version* lies inside this range."""
        if isinstance(version, str):
            version = NuGetVersion.parse(version)
        if self.min_version is not None:
            if self.include_min:
                if version < self.min_version:
                    return False
            elif version <= self.min_version:
                return False
        if self.max_version is not None:
            if self.include_max:
                if version > self.max_version:
                    return False
            elif version >= self.max_version:
                return False
        return True

    @property
    def is_exact(self) -> bool:
        return (
            self.min_version is not None
            and self.min_version == self.max_version
            and self.include_min
            and self.include_max
        )

    @classmethod
    def exact(cls, version: NuGetVersion | str) -> VersionRange:
        if isinstance(version, str):
            version = NuGetVersion.parse(version)
        return cls(version, version, True, True)

    def __str__(self) -> str:
        if self.is_exact:
            return f"[{self.min_version}]"
        low = str(self.min_version) if self.min_version is not None else ""
        high = str(self.max_version) if self.max_version is not None else ""
        left = "[" if self.include_min and self.min_version is not None else "("
        right = "]" if self.include_max and self.max_version is not None else ")"
        return f"{left}{low}, {high}{right}"

    def __repr__(self) -> str:
        return f"VersionRange({str(self)!r})"

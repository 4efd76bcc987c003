"""
Canonical toolchain identity.

A version key has the form ``<name>[-dbg]@<version>``, for example
``cpython@3.12.1``, ``cpython-dbg@3.11.4`` or ``custom@3.11.4``. The full
string is the unique identity of a toolchain and the name of its entry in
the canonical toolchain root.

Example:
    >>> key = VersionKey.parse("cpython@3.12.1")
    >>> key.name, key.version
    ('cpython', '3.12.1')
    >>> str(key)
    'cpython@3.12.1'
"""

import functools
import re
from dataclasses import dataclass
from typing import Tuple

from interpkit.core.exceptions import ParseError

DEBUG_SUFFIX = "-dbg"

_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.+-]*$")

# major.minor[.patch] followed by an optional pre-release or local suffix
# such as "rc1", "a2", "b1" or the "+" that development builds report.
_VERSION_RE = re.compile(
    r"^(?P<major>\d+)\.(?P<minor>\d+)(?:\.(?P<patch>\d+))?"
    r"(?:(?P<phase>a|b|rc)(?P<serial>\d+))?(?P<local>\+)?$"
)

_PHASE_RANK = {"a": 0, "b": 1, "rc": 2, None: 3}


@functools.total_ordering
@dataclass(frozen=True)
class VersionKey:
    """
    Identity of a toolchain.

    Ordering is presentation order: name ascending, then version descending
    so the most recent release of each name comes first.
    """

    name: str
    version: str

    @classmethod
    def parse(cls, value: str) -> "VersionKey":
        """
        Parse a canonical key string.

        Raises:
            ParseError: If the ``@`` separator is missing, the name is not a
                valid path component or the version is not well-formed.
        """
        name, sep, version = value.partition("@")
        if not sep:
            raise ParseError(f"invalid version key '{value}': missing '@' separator")
        if not _NAME_RE.match(name):
            raise ParseError(
                f"invalid version key '{value}': bad toolchain name '{name}'"
            )
        if not _VERSION_RE.match(version):
            raise ParseError(f"invalid version key '{value}': bad version '{version}'")
        return cls(name=name, version=version)

    @classmethod
    def derive(
        cls, implementation: str, version: str, debug: bool = False
    ) -> "VersionKey":
        """Build the key an interpreter reports for itself."""
        name = implementation.lower()
        if debug:
            name += DEBUG_SUFFIX
        return cls.parse(f"{name}@{version}")

    def to_string(self) -> str:
        return f"{self.name}@{self.version}"

    def version_tuple(self) -> Tuple[int, int, int, int, int, int]:
        """
        Numeric view of the version for ordering.

        Final releases rank above pre-releases of the same number, and a
        development build ("+") ranks above the release it was built from.
        """
        match = _VERSION_RE.match(self.version)
        if match is None:
            raise ParseError(f"bad version '{self.version}'")
        phase = match.group("phase")
        return (
            int(match.group("major")),
            int(match.group("minor")),
            int(match.group("patch") or 0),
            _PHASE_RANK[phase],
            int(match.group("serial") or 0),
            1 if match.group("local") else 0,
        )

    def __str__(self) -> str:
        return self.to_string()

    def __lt__(self, other: "VersionKey") -> bool:
        if not isinstance(other, VersionKey):
            return NotImplemented
        return compare(self, other) < 0


def compare(a: VersionKey, b: VersionKey) -> int:
    """
    Compare two keys in presentation order.

    Returns:
        Negative if ``a`` sorts first, positive if ``b`` does, 0 if equal.
    """
    if a.name != b.name:
        return -1 if a.name < b.name else 1
    va, vb = a.version_tuple(), b.version_tuple()
    if va != vb:
        return -1 if va > vb else 1
    if a.version != b.version:
        return -1 if a.version < b.version else 1
    return 0


__all__ = ["VersionKey", "compare", "DEBUG_SUFFIX"]

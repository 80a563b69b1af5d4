"""Version parsing and ordering for deploy references.

Only references shaped like ``v<int>[.<int>...]`` are versioned. Everything
else (branches, SHAs, pre-release suffixes such as ``v4.2-beta``) is treated as
non-versioned and never takes part in ordering.
"""

import re

VERSION_PATTERN = re.compile(r"^v(\d+(?:\.\d+)*)$")


def parse_version(reference: str | None) -> tuple[int, ...] | None:
    """Parse a reference into a comparable tuple of integers.

    Args:
        reference: Reference name, e.g. ``v4.10`` or ``master``

    Returns:
        Tuple of version components, or None if the reference is not versioned
    """
    if not reference:
        return None
    match = VERSION_PATTERN.match(reference)
    if not match:
        return None
    return tuple(int(part) for part in match.group(1).split("."))


def is_versioned(reference: str | None) -> bool:
    """Return True if the reference is an immutable version tag."""
    return parse_version(reference) is not None


def compare_versions(a: str | None, b: str | None) -> int | None:
    """Compare two references by version.

    Args:
        a: First reference
        b: Second reference

    Returns:
        -1, 0 or 1 when both references are versioned, None when they are
        incomparable
    """
    left = parse_version(a)
    right = parse_version(b)
    if left is None or right is None:
        return None
    return (left > right) - (left < right)


def is_newer(candidate: str | None, reference: str | None) -> bool:
    """Return True if ``candidate`` is a strictly newer version than ``reference``."""
    return compare_versions(candidate, reference) == 1


def sort_key(reference: str) -> tuple[int, ...]:
    """Sort key for versioned references.

    Raises:
        ValueError: If the reference is not versioned
    """
    version = parse_version(reference)
    if version is None:
        raise ValueError(f"Reference '{reference}' is not a version")
    return version

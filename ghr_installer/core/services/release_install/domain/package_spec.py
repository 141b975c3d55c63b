"""
L1 Domain — Package spec parsing (pure).

Parses ``owner/project@version`` into a ``PackageSpec``.
No I/O, no subprocess.
"""

from __future__ import annotations

import re

from ghr_installer.core.errors import InvalidSpecError, InvalidVersionError
from ghr_installer.core.models.release import PackageSpec

# Semantic Versioning 2.0.0 (semver.org), ASCII digits only.
_NUM = r"(?:0|[1-9][0-9]*)"
_PRE_ID = r"(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
_BUILD_ID = r"[0-9a-zA-Z-]+"
_SEMVER_RE = re.compile(
    rf"{_NUM}\.{_NUM}\.{_NUM}"
    rf"(?:-{_PRE_ID}(?:\.{_PRE_ID})*)?"
    rf"(?:\+{_BUILD_ID}(?:\.{_BUILD_ID})*)?"
)

# Segments end up as cache directory names.
_RESERVED_SEGMENTS = {".", ".."}


def is_semver(version: str) -> bool:
    """Return True if ``version`` is a strict semantic version (no ``v`` prefix)."""
    return _SEMVER_RE.fullmatch(version) is not None


def parse_package_spec(text: str) -> PackageSpec:
    """Parse ``owner/project@version``.

    The version is everything after the *last* ``@``.

    Raises:
        InvalidSpecError: No ``@``, or the prefix is not exactly two
            non-empty ``/``-separated segments.
        InvalidVersionError: The version is not strict semver.
    """
    at = text.rfind("@")
    if at == -1:
        raise InvalidSpecError(f"version not specified in {text!r} (expected owner/project@version)")

    owner_and_project, version = text[:at], text[at + 1:]
    if not is_semver(version):
        raise InvalidVersionError(f"invalid semantic version {version!r} in {text!r}")

    parts = owner_and_project.split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidSpecError(f"invalid owner/project {owner_and_project!r} in {text!r}")
    for part in parts:
        if "@" in part or part in _RESERVED_SEGMENTS or part.strip() != part:
            raise InvalidSpecError(f"invalid owner/project segment {part!r} in {text!r}")

    owner, project = parts
    return PackageSpec(owner=owner, project=project, version=version)

"""
Release host adapters.

    ReleaseClient        — abstract contract used by the install pipeline
    GitHubReleaseClient  — GitHub REST API over urllib
    MockReleaseClient    — in-memory double for tests
"""

from ghr_installer.adapters.base import ReleaseClient
from ghr_installer.adapters.github import GitHubReleaseClient, release_from_payload
from ghr_installer.adapters.mock import MockReleaseClient

__all__ = [
    "GitHubReleaseClient",
    "MockReleaseClient",
    "ReleaseClient",
    "release_from_payload",
]

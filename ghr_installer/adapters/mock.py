"""
Mock release client — in-memory test double for a release host.

Serves releases and asset bytes registered up front, and records every
call so tests can assert that cached runs touch the network zero times.
"""

from __future__ import annotations

from typing import BinaryIO

from ghr_installer.adapters.base import ReleaseClient
from ghr_installer.core.errors import NetworkFailureError
from ghr_installer.core.models.release import AssetDescriptor, ReleaseMetadata


class MockReleaseClient(ReleaseClient):
    """In-memory release host.

    By default knows no releases; populate it with ``add_asset``.
    """

    def __init__(self, base_url: str = "https://releases.example.invalid"):
        self._base_url = base_url.rstrip("/")
        self._releases: dict[tuple[str, str, str], list[AssetDescriptor]] = {}
        self._blobs: dict[str, bytes] = {}
        self._failures: dict[str, str] = {}
        self._call_log: list[tuple[str, str]] = []

    @property
    def call_log(self) -> list[tuple[str, str]]:
        """``(operation, target)`` for every call received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def add_release(self, owner: str, project: str, tag: str) -> None:
        """Register an empty release."""
        self._releases.setdefault((owner, project, tag), [])

    def add_asset(self, owner: str, project: str, tag: str, name: str, content: bytes) -> AssetDescriptor:
        """Attach an asset to a release, creating the release if needed."""
        url = f"{self._base_url}/{owner}/{project}/releases/download/{tag}/{name}"
        asset = AssetDescriptor(name=name, download_url=url)
        self._releases.setdefault((owner, project, tag), []).append(asset)
        self._blobs[url] = content
        return asset

    def set_failure(self, url: str, error: str = "Mock failure") -> None:
        """Make downloads of ``url`` fail with a network error."""
        self._failures[url] = error

    def clear_failure(self, url: str) -> None:
        self._failures.pop(url, None)

    def get_release_by_tag(self, owner: str, project: str, tag: str) -> ReleaseMetadata:
        self._call_log.append(("get_release_by_tag", f"{owner}/{project}@{tag}"))
        assets = self._releases.get((owner, project, tag))
        if assets is None:
            raise NetworkFailureError(f"release {owner}/{project}@{tag} not found", status=404)
        return ReleaseMetadata(tag_name=tag, name=tag, assets=tuple(assets))

    def download(self, url: str, destination: BinaryIO) -> int:
        self._call_log.append(("download", url))
        if url in self._failures:
            raise NetworkFailureError(self._failures[url])
        if url not in self._blobs:
            raise NetworkFailureError(f"GET {url} failed: HTTP 404 Not Found", status=404)
        content = self._blobs[url]
        destination.write(content)
        return len(content)

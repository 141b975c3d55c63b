"""
Release client base — the contract between the installer and a release host.

The install pipeline only talks to the remote side through this
interface: list one release by tag, and stream one asset's bytes.
Both are blocking calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO

from ghr_installer.core.models.release import ReleaseMetadata


class ReleaseClient(ABC):
    """Abstract base class for release hosts.

    Failures raise ``NetworkFailureError``; the pipeline does not retry.
    """

    @abstractmethod
    def get_release_by_tag(self, owner: str, project: str, tag: str) -> ReleaseMetadata:
        """Return the asset listing of ``owner/project`` at ``tag``."""

    @abstractmethod
    def download(self, url: str, destination: BinaryIO) -> int:
        """Stream the bytes at ``url`` into ``destination``.

        Returns:
            Number of bytes written.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"

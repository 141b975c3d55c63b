"""
Release Install — release metadata cache and download cache.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ghr_installer.adapters.mock import MockReleaseClient
from ghr_installer.core.errors import IOFailureError, NetworkFailureError
from ghr_installer.core.models.release import AssetDescriptor, PackageSpec
from ghr_installer.core.services.release_install.context import InstallContext
from ghr_installer.core.services.release_install.execution.download import download_asset
from ghr_installer.core.services.release_install.execution.release_cache import (
    release_metadata_path,
    resolve_release_metadata,
)

SPEC = PackageSpec(owner="acme", project="myproj", version="1.2.3")
ASSET_NAME = "myproj_1.2.3_linux_amd64.tar.gz"


@pytest.fixture
def asset(mock_client: MockReleaseClient) -> AssetDescriptor:
    return mock_client.add_asset("acme", "myproj", "v1.2.3", ASSET_NAME, b"archive-bytes")


class TestReleaseMetadataCache:
    """Tests for resolve_release_metadata()."""

    def test_keyed_path(self, install_ctx: InstallContext):
        path = release_metadata_path(install_ctx, SPEC)
        base = install_ctx.base_directory
        assert path == base / "metadata" / "github.com" / "acme" / "myproj" / "1.2.3" / "repositoryRelease.json"

    def test_fetches_once(self, install_ctx: InstallContext, mock_client: MockReleaseClient, asset):
        release, changed = resolve_release_metadata(install_ctx, SPEC)
        assert changed is True
        assert release.asset_names() == [ASSET_NAME]
        assert release_metadata_path(install_ctx, SPEC).is_file()

        again, changed = resolve_release_metadata(install_ctx, SPEC)
        assert changed is False
        assert again == release
        assert mock_client.call_log == [("get_release_by_tag", "acme/myproj@v1.2.3")]

    def test_cache_is_json(self, install_ctx: InstallContext, asset):
        resolve_release_metadata(install_ctx, SPEC)
        data = json.loads(release_metadata_path(install_ctx, SPEC).read_text())
        assert data["assets"][0]["name"] == ASSET_NAME
        assert data["assets"][0]["download_url"] == asset.download_url

    def test_corrupt_cache_is_refetched(self, install_ctx: InstallContext, mock_client, asset):
        path = release_metadata_path(install_ctx, SPEC)
        path.parent.mkdir(parents=True)
        path.write_text("{not json")

        release, changed = resolve_release_metadata(install_ctx, SPEC)
        assert changed is True
        assert release.asset_names() == [ASSET_NAME]
        assert mock_client.call_count == 1

    def test_unknown_release(self, install_ctx: InstallContext):
        with pytest.raises(NetworkFailureError) as exc_info:
            resolve_release_metadata(install_ctx, SPEC)
        assert exc_info.value.status == 404
        assert not release_metadata_path(install_ctx, SPEC).exists()

    def test_progress_reported(self, install_ctx: InstallContext, asset, progress_lines):
        resolve_release_metadata(install_ctx, SPEC)
        assert progress_lines == ["[acme/myproj@1.2.3] fetching release v1.2.3..."]


class TestDownloadCache:
    """Tests for download_asset()."""

    def test_downloads_new_asset(self, install_ctx: InstallContext, asset, progress_lines):
        directory = install_ctx.download_dir(SPEC)
        path, changed = download_asset(install_ctx, SPEC, asset, directory)
        assert changed is True
        assert path == directory / ASSET_NAME
        assert path.read_bytes() == b"archive-bytes"
        assert progress_lines[0].startswith("[acme/myproj@1.2.3] downloading package (")

    def test_existing_file_is_not_fetched(self, install_ctx: InstallContext, mock_client, asset, progress_lines):
        directory = install_ctx.download_dir(SPEC)
        directory.mkdir(parents=True)
        (directory / ASSET_NAME).write_bytes(b"already here")

        path, changed = download_asset(install_ctx, SPEC, asset, directory, kind="checksums")
        assert changed is False
        assert path.read_bytes() == b"already here"
        assert mock_client.call_count == 0
        assert progress_lines == ["[acme/myproj@1.2.3] checksums already downloaded..."]

    def test_failure_leaves_no_file(self, install_ctx: InstallContext, mock_client, asset):
        mock_client.set_failure(asset.download_url, "connection reset")
        directory = install_ctx.download_dir(SPEC)

        with pytest.raises(NetworkFailureError, match="connection reset"):
            download_asset(install_ctx, SPEC, asset, directory)
        assert list(directory.iterdir()) == []

    def test_unsafe_asset_name(self, install_ctx: InstallContext):
        evil = AssetDescriptor(name="../evil.tar.gz", download_url="https://dl.example/evil")
        with pytest.raises(IOFailureError):
            download_asset(install_ctx, SPEC, evil, install_ctx.download_dir(SPEC))

    def test_unwritable_destination(self, install_ctx: InstallContext, asset, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(IOFailureError):
            download_asset(install_ctx, SPEC, asset, blocker / "sub")

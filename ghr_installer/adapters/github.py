"""
GitHub release client — REST API over urllib.

Only two endpoints are used:

    GET {api_url}/repos/{owner}/{project}/releases/tags/{tag}
    GET {browser_download_url}

A bearer token is optional; it raises rate limits and grants access to
private repositories but changes nothing else.  The token header is
never forwarded across redirects (asset downloads redirect to a
different host).
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, BinaryIO

from ghr_installer.adapters.base import ReleaseClient
from ghr_installer.core.errors import NetworkFailureError
from ghr_installer.core.models.config import DEFAULT_API_URL, DEFAULT_USER_AGENT
from ghr_installer.core.models.release import AssetDescriptor, ReleaseMetadata

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


class GitHubReleaseClient(ReleaseClient):
    """Fetch releases and assets from GitHub (or a compatible API)."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        *,
        token: str | None = None,
        timeout: float | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._token = token or None
        self._timeout = timeout
        self._user_agent = user_agent

    def _request(self, url: str, accept: str) -> urllib.request.Request:
        req = urllib.request.Request(
            url,
            headers={"Accept": accept, "User-Agent": self._user_agent},
        )
        if self._token:
            req.add_unredirected_header("Authorization", f"Bearer {self._token}")
        return req

    def _open(self, url: str, accept: str = "*/*"):
        try:
            return urllib.request.urlopen(self._request(url, accept), timeout=self._timeout)
        except urllib.error.HTTPError as exc:
            raise NetworkFailureError(f"GET {url} failed: HTTP {exc.code} {exc.reason}", status=exc.code) from exc
        except (urllib.error.URLError, OSError) as exc:
            raise NetworkFailureError(f"GET {url} failed: {exc}") from exc

    def get_release_by_tag(self, owner: str, project: str, tag: str) -> ReleaseMetadata:
        url = "{}/repos/{}/{}/releases/tags/{}".format(
            self._api_url,
            urllib.parse.quote(owner, safe=""),
            urllib.parse.quote(project, safe=""),
            urllib.parse.quote(tag, safe=""),
        )
        logger.debug("Fetching release %s/%s@%s from %s", owner, project, tag, url)

        with self._open(url, accept="application/vnd.github+json") as resp:
            try:
                raw = resp.read()
            except OSError as exc:
                raise NetworkFailureError(f"GET {url} interrupted: {exc}") from exc
        try:
            payload = json.loads(raw.decode("utf-8"))
        except ValueError as exc:
            raise NetworkFailureError(f"invalid release payload from {url}: {exc}") from exc

        return release_from_payload(payload)

    def download(self, url: str, destination: BinaryIO) -> int:
        logger.debug("Downloading %s", url)
        written = 0
        with self._open(url, accept="application/octet-stream") as resp:
            while True:
                try:
                    chunk = resp.read(_CHUNK_SIZE)
                except OSError as exc:
                    raise NetworkFailureError(f"download of {url} interrupted: {exc}") from exc
                if not chunk:
                    break
                destination.write(chunk)
                written += len(chunk)
        logger.debug("Downloaded %d bytes from %s", written, url)
        return written


def release_from_payload(payload: Any) -> ReleaseMetadata:
    """Convert a GitHub ``RepositoryRelease`` JSON object into ``ReleaseMetadata``."""
    if not isinstance(payload, dict):
        raise NetworkFailureError(f"expected a release object, got {type(payload).__name__}")

    assets: list[AssetDescriptor] = []
    raw_assets = payload.get("assets") or []
    if not isinstance(raw_assets, list):
        raise NetworkFailureError(f"expected a list of assets, got {type(raw_assets).__name__}")

    for item in raw_assets:
        if not isinstance(item, dict):
            logger.debug("Skipping release asset that is not an object: %r", item)
            continue
        name = item.get("name")
        url = item.get("browser_download_url")
        if not name or not url:
            logger.debug("Skipping release asset without name or URL: %r", item)
            continue
        assets.append(AssetDescriptor(name=name, download_url=url))

    return ReleaseMetadata(
        tag_name=payload.get("tag_name") or "",
        name=payload.get("name") or "",
        assets=tuple(assets),
    )

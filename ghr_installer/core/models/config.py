"""
Installer configuration model — loaded from ghr-installer.yml.

Every key is optional; an absent file means all defaults.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_HOST = "github.com"
DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"
DEFAULT_USER_AGENT = "ghr-installer/0.1"


class InstallerConfig(BaseModel):
    """Remote API and cache layout settings."""

    model_config = ConfigDict(extra="forbid")

    api_url: str = DEFAULT_API_URL
    host: str = Field(default=DEFAULT_HOST, min_length=1)
    token_env: str = DEFAULT_TOKEN_ENV
    # None means block indefinitely, like the underlying socket.
    timeout: float | None = Field(default=None, gt=0)
    user_agent: str = DEFAULT_USER_AGENT

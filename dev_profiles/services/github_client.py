import logging
from typing import Optional
from urllib.parse import quote

import httpx

from dev_profiles.exceptions import GithubLookupError

logger = logging.getLogger(__name__)

REPO_LIMIT = 5


class GithubClient:
    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict:
        headers = {
            "User-Agent": "dev-profiles",
            "Accept": "application/vnd.github+json",
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    async def fetch_repos(self, username: str) -> list[dict]:
        """Return the most recently created public repos of ``username``.

        Every failure (network, auth, unknown user, bad payload) surfaces as
        GithubLookupError; the cause is only logged.
        """
        path = f"/users/{quote(username, safe='')}/repos"
        params = {"per_page": REPO_LIMIT, "sort": "created", "direction": "desc"}
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(path, params=params, headers=self._headers())
                response.raise_for_status()
                repos = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"GitHub lookup for {username!r} returned {e.response.status_code}")
            raise GithubLookupError(cause=f"status {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"GitHub lookup for {username!r} failed: {e!r}")
            raise GithubLookupError(cause=repr(e)) from e

        if not isinstance(repos, list):
            logger.warning(f"GitHub lookup for {username!r} returned unexpected payload")
            raise GithubLookupError(cause="unexpected payload")
        return repos[:REPO_LIMIT]


def get_github_client() -> GithubClient:
    """Build a GitHub client from application settings."""
    from dev_profiles.config import settings

    return GithubClient(
        token=settings.github_token,
        base_url=settings.github_api_url,
        timeout=settings.github_timeout_seconds,
    )

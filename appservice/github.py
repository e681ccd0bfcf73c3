"""Creating, naming and deleting GitHub repositories for applications."""

from __future__ import annotations

import random
from urllib.parse import quote

import requests

from appservice.util import sanitize_name

APP_STUDIO_APP_DATA_ORG = "redhat-appstudio-appdata"
GITHUB_API_URL = "https://api.github.com"

_VERBS = (
    "run", "jump", "build", "carry", "dance", "draw", "drive", "eat", "fly",
    "grow", "help", "hold", "keep", "laugh", "learn", "lift", "listen", "move",
    "open", "paint", "play", "pull", "push", "read", "ride", "sing", "sit",
    "sleep", "smile", "speak", "stand", "swim", "teach", "think", "throw",
    "travel", "walk", "wash", "watch", "write",
)


class GitHubClient:
    """A minimal client for the GitHub REST API."""

    def __init__(
        self,
        token: str | None = None,
        api_url: str = GITHUB_API_URL,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers["Accept"] = "application/vnd.github.v3+json"
        if token:
            self._session.headers["Authorization"] = f"token {token}"

    def _url(self, *segments: str) -> str:
        return "/".join([self.api_url, *(quote(s, safe="") for s in segments)])

    def create_repository(
        self, org_name: str, repo_name: str, description: str = "", private: bool = False
    ) -> dict:
        """Create a repository in ``org_name`` and return GitHub's description of it."""
        response = self._session.post(
            self._url("orgs", org_name, "repos"),
            json={"name": repo_name, "private": private, "description": description},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json() if response.content else {}

    def delete_repository(self, org_name: str, repo_name: str) -> None:
        """Delete ``org_name/repo_name``."""
        response = self._session.delete(
            self._url("repos", org_name, repo_name), timeout=self.timeout
        )
        response.raise_for_status()

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def generate_new_repository_name(display_name: str, namespace: str) -> str:
    """Build a repository name from the display name, namespace and two random verbs."""
    first, second = (sanitize_name(random.choice(_VERBS)) for _ in range(2))
    return f"{sanitize_name(display_name)}-{namespace}-{first}-{second}"


def generate_new_repository(
    client: GitHubClient, org_name: str, repo_name: str, description: str = ""
) -> str:
    """Create a public repository and return its web URL."""
    client.create_repository(org_name, repo_name, description, private=False)
    return f"https://github.com/{org_name}/{repo_name}"


def get_repo_name_from_url(repo_url: str, org_name: str) -> str:
    """Return the part of ``repo_url`` after ``org_name/``."""
    parts = repo_url.split(org_name + "/")
    if len(parts) < 2:
        raise ValueError(f"error: unable to parse Git repository URL: {repo_url}")
    return parts[1]


def delete_repository(client: GitHubClient, org_name: str, repo_name: str) -> None:
    """Delete the named repository from ``org_name``."""
    client.delete_repository(org_name, repo_name)
"""Devfile registry lookups and helpers for component contexts and Dockerfile links."""

from __future__ import annotations

import json
import posixpath
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from appservice.util import convert_github_url, curl_endpoint


@dataclass
class DevfileType:
    """A registry sample described by the fields used for project detection."""

    name: str
    language: str = ""
    project_type: str = ""
    tags: list[str] = field(default_factory=list)


def _fetch_sample_index(registry_url: str) -> list[dict]:
    parts = urlsplit(registry_url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ValueError(f"invalid registry URL: {registry_url}")
    index = json.loads(curl_endpoint(registry_url.rstrip("/") + "/index/sample"))
    if index is None:
        return []
    if not isinstance(index, list):
        raise ValueError(f"unexpected registry index format from {registry_url}")
    return index


def get_alizer_devfile_types(registry_url: str) -> list[DevfileType]:
    """Return the sample devfile types listed by the registry at ``registry_url``."""
    return [
        DevfileType(
            name=entry.get("name", ""),
            language=entry.get("language", ""),
            project_type=entry.get("projectType", ""),
            tags=list(entry.get("tags") or []),
        )
        for entry in _fetch_sample_index(registry_url)
    ]


def get_repo_from_registry(name: str, registry_url: str) -> str:
    """Return the origin Git remote of the registry sample called ``name``."""
    for entry in _fetch_sample_index(registry_url):
        remotes = (entry.get("git") or {}).get("remotes") or {}
        if entry.get("name") == name and remotes.get("origin"):
            return remotes["origin"]
    raise LookupError(f"unable to find sample with a name {name} in the registry")


def _base_name(path: str) -> str:
    stripped = path.rstrip("/")
    if not stripped:
        return "/" if path else "."
    return posixpath.basename(stripped)


def get_context(localpath: str, current_level: int) -> str:
    """Return the last ``current_level`` components of ``localpath`` as a context path."""
    context = "./"
    current = localpath
    for _ in range(current_level):
        context = posixpath.normpath(posixpath.join(_base_name(current), context))
        current = posixpath.dirname(current.rstrip("/")) or "/"
    return context


def update_dockerfile_link(repo: str, revision: str, context: str) -> str:
    """Turn a Dockerfile path relative to ``repo`` into a raw download link.

    Values that already start with ``http`` are returned unchanged.
    """
    if context.startswith("http"):
        return context
    raw_url = convert_github_url(repo, revision)
    if not raw_url.endswith("/"):
        raw_url += "/"
    return raw_url + context
"""General helpers: name sanitising, URL conversion, HTTP fetching and regex checks."""

from __future__ import annotations

import os
import re
from urllib.parse import urlsplit

import requests

_MAX_NAME_LENGTH = 50
_GIT_SUFFIX = re.compile(".git$")
_REQUEST_TIMEOUT = 30.0


class EndpointError(Exception):
    """Raised when an HTTP endpoint answers with a status other than 200."""


def sanitize_name(name: str) -> str:
    """Lower-case ``name``, replace spaces with dashes, drop apostrophes, cap at 50 chars."""
    sanitized = name.replace(" ", "-").replace("'", "").lower()
    return sanitized[:_MAX_NAME_LENGTH]


def is_exist(path: str) -> bool:
    """Return whether ``path`` exists; errors other than a missing path are raised."""
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    return True


def _check_control_characters(url: str) -> None:
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        raise ValueError(f"invalid control character in URL: {url!r}")


def convert_github_url(url: str, revision: str = "") -> str:
    """Convert a GitHub repository URL to its raw-content form.

    Non-GitHub URLs and URLs that are already raw are returned with only the
    ``.git`` suffix and trailing slash removed.
    """
    url = _GIT_SUFFIX.sub("", url)
    url = url.removesuffix("/")

    _check_control_characters(url)
    parsed = urlsplit(url)
    host = parsed.netloc.rpartition("@")[2]

    if "github" in host and "raw" not in host:
        segments = url.split("/")
        if len(segments) > 2 and segments[-2] == "tree":
            # Raw URLs have no "tree" segment before the branch name.
            url = url.replace("/tree", "", 1)
        elif revision:
            url = f"{url}/{revision}"
        else:
            url = f"{url}/main"

        if host == "github.com":
            url = url.replace("github.com", "raw.githubusercontent.com", 1)

    return url


def curl_endpoint(endpoint: str) -> bytes:
    """GET ``endpoint`` and return the body; raise EndpointError unless the status is 200."""
    with requests.get(endpoint, timeout=_REQUEST_TIMEOUT) as response:
        if response.status_code == requests.codes.ok:
            return response.content
    raise EndpointError(f"received a non-200 status when curling {endpoint}")


def check_with_regex(pattern: str, name: str) -> bool:
    """Return whether ``pattern`` matches anywhere in ``name``; False if it does not compile."""
    try:
        compiled = re.compile(pattern)
    except re.error:
        return False
    return compiled.search(name) is not None
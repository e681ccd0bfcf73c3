"""Fetching devfiles and Dockerfiles through a service-provider integration client."""

from __future__ import annotations

import posixpath
from abc import ABC, abstractmethod
from typing import BinaryIO

from appservice.devfile import DOCKERFILE_NAME, VALID_DEVFILE_LOCATIONS
from appservice.errors import NoDevfileFound, NoFileFound


class SPI(ABC):
    """A client able to read files from (possibly private) Git repositories."""

    @abstractmethod
    def get_file_contents(self, namespace: str, repo_url: str, filepath: str, ref: str) -> BinaryIO:
        """Open ``filepath`` at ``ref`` in ``repo_url`` and return a readable binary stream."""


def _repo_path(path: str, filename: str) -> str:
    return posixpath.normpath(posixpath.join("/", path.lstrip("/"), filename))


def download_file_using_spi(
    client: SPI, namespace: str, repo_url: str, ref: str, filepath: str
) -> bytes:
    """Read one file from the repository; raise NoFileFound if it cannot be opened."""
    try:
        stream = client.get_file_contents(namespace, repo_url, filepath, ref)
    except Exception as err:
        raise NoFileFound(repo_url) from err
    with stream:
        return stream.read()


def download_devfile_using_spi(
    client: SPI, namespace: str, repo_url: str, ref: str, path: str
) -> bytes:
    """Read the devfile from the first valid location under ``path`` in the repository."""
    for filename in VALID_DEVFILE_LOCATIONS:
        try:
            return download_file_using_spi(
                client, namespace, repo_url, ref, _repo_path(path, filename)
            )
        except NoFileFound:
            continue
    raise NoDevfileFound(repo_url)


def download_devfile_and_dockerfile_using_spi(
    client: SPI, namespace: str, repo_url: str, ref: str, path: str
) -> tuple[bytes | None, bytes | None]:
    """Read the devfile and Dockerfile under ``path``; missing ones are None."""
    try:
        devfile = download_devfile_using_spi(client, namespace, repo_url, ref, path)
    except NoDevfileFound:
        devfile = None
    try:
        dockerfile = download_file_using_spi(
            client, namespace, repo_url, ref, _repo_path(path, DOCKERFILE_NAME)
        )
    except NoFileFound:
        dockerfile = None
    return devfile, dockerfile
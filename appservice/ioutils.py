"""Filesystem abstractions: the local disk, an in-memory tree and a read-only view."""

from __future__ import annotations

import errno
import os
import posixpath
import random
import shutil
import tempfile
from abc import ABC, abstractmethod


class Filesystem(ABC):
    """The operations the service needs from a filesystem."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return whether ``path`` exists."""

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Return whether ``path`` is an existing directory."""

    @abstractmethod
    def create(self, path: str) -> None:
        """Create an empty file at ``path``, truncating any existing file."""

    @abstractmethod
    def mkdir(self, path: str) -> None:
        """Create the directory ``path``."""

    @abstractmethod
    def temp_dir(self, directory: str, prefix: str) -> str:
        """Create a new uniquely named directory under ``directory`` and return its path."""

    @abstractmethod
    def remove_all(self, path: str) -> None:
        """Remove ``path`` and everything beneath it; a missing path is not an error."""


class OsFilesystem(Filesystem):
    """The local operating-system filesystem."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def create(self, path: str) -> None:
        with open(path, "wb"):
            pass

    def mkdir(self, path: str) -> None:
        os.mkdir(path, 0o755)

    def temp_dir(self, directory: str, prefix: str) -> str:
        return tempfile.mkdtemp(prefix=prefix, dir=directory)

    def remove_all(self, path: str) -> None:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        elif os.path.lexists(path):
            os.remove(path)


class MemoryFilesystem(Filesystem):
    """A filesystem held entirely in memory; parent directories are created implicitly."""

    def __init__(self) -> None:
        self._dirs: set[str] = {"/"}
        self._files: dict[str, bytes] = {}

    @staticmethod
    def _norm(path: str) -> str:
        return posixpath.normpath(posixpath.join("/", path))

    def _add_parents(self, path: str) -> None:
        parent = posixpath.dirname(path)
        while parent not in self._dirs:
            if parent in self._files:
                raise NotADirectoryError(errno.ENOTDIR, "not a directory", parent)
            self._dirs.add(parent)
            parent = posixpath.dirname(parent)

    def exists(self, path: str) -> bool:
        p = self._norm(path)
        return p in self._dirs or p in self._files

    def is_dir(self, path: str) -> bool:
        return self._norm(path) in self._dirs

    def create(self, path: str) -> None:
        p = self._norm(path)
        if p in self._dirs:
            raise IsADirectoryError(errno.EISDIR, "is a directory", path)
        self._add_parents(p)
        self._files[p] = b""

    def mkdir(self, path: str) -> None:
        p = self._norm(path)
        if self.exists(p):
            raise FileExistsError(errno.EEXIST, "file already exists", path)
        self._add_parents(p)
        self._dirs.add(p)

    def temp_dir(self, directory: str, prefix: str) -> str:
        base = self._norm(directory)
        while True:
            candidate = posixpath.join(base, f"{prefix}{random.randrange(10**9)}")
            if not self.exists(candidate):
                self.mkdir(candidate)
                return candidate

    def remove_all(self, path: str) -> None:
        p = self._norm(path)
        inside = "/" if p == "/" else p + "/"
        self._files = {
            f: data for f, data in self._files.items() if f != p and not f.startswith(inside)
        }
        self._dirs = {d for d in self._dirs if d != p and not d.startswith(inside)}
        self._dirs.add("/")


class ReadOnlyFilesystem(Filesystem):
    """A view of another filesystem that refuses every write."""

    def __init__(self, base: Filesystem | None = None) -> None:
        self._base = base if base is not None else OsFilesystem()

    @staticmethod
    def _deny(path: str) -> PermissionError:
        return PermissionError(errno.EPERM, "operation not permitted", path)

    def exists(self, path: str) -> bool:
        return self._base.exists(path)

    def is_dir(self, path: str) -> bool:
        return self._base.is_dir(path)

    def create(self, path: str) -> None:
        raise self._deny(path)

    def mkdir(self, path: str) -> None:
        raise self._deny(path)

    def temp_dir(self, directory: str, prefix: str) -> str:
        raise self._deny(directory)

    def remove_all(self, path: str) -> None:
        raise self._deny(path)


def new_filesystem() -> Filesystem:
    """Return the local filesystem."""
    return OsFilesystem()


def new_memory_filesystem() -> Filesystem:
    """Return an empty in-memory filesystem."""
    return MemoryFilesystem()


def new_read_only_fs() -> Filesystem:
    """Return a read-only view of the local filesystem."""
    return ReadOnlyFilesystem(OsFilesystem())


def _base_name(path: str) -> str:
    stripped = path.rstrip("/")
    if not stripped:
        return "/" if path else "."
    return posixpath.basename(stripped)


def is_existing(fs: Filesystem, path: str) -> bool:
    """Return False if ``path`` does not exist on ``fs``.

    If it does exist, raise FileExistsError naming whether a file or a
    directory is in the way.
    """
    if not fs.exists(path):
        return False
    kind = "Dir" if fs.is_dir(path) else "File"
    raise FileExistsError(f'"{_base_name(path)}": {kind} already exists at {path}')


def create_temp_path(prefix: str, fs: Filesystem) -> str:
    """Create a temporary directory with ``prefix`` in the system temp dir on ``fs``."""
    return fs.temp_dir(tempfile.gettempdir(), prefix)
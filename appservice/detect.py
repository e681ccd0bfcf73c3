"""Detection of devfiles and Dockerfiles in a local checkout of a repository."""

from __future__ import annotations

import os
import posixpath
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from appservice.devfile import (
    DEVFILE_NAME,
    DOCKERFILE_NAME,
    HIDDEN_DEVFILE_DIR,
    HIDDEN_DEVFILE_NAME,
    parse_devfile_model,
)
from appservice.errors import NoDevfileFound
from appservice.registry import (
    DevfileType,
    get_alizer_devfile_types,
    get_context,
    get_repo_from_registry,
    update_dockerfile_link,
)
from appservice.util import curl_endpoint


@dataclass
class Language:
    """A language detected in a project, as reported by the analyser."""

    name: str
    aliases: list[str] = field(default_factory=list)
    weight: float = 0.0
    frameworks: list[str] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)
    can_be_component: bool = False


class Alizer(ABC):
    """A project analyser that detects languages and matches registry devfiles."""

    @abstractmethod
    def analyze(self, path: str) -> list[Language]:
        """Return the languages detected in the project at ``path``."""

    @abstractmethod
    def select_devfile_from_types(
        self, path: str, devfile_types: list[DevfileType]
    ) -> DevfileType | None:
        """Return the devfile type that best fits the project at ``path``, or None."""


@dataclass
class ScanResult:
    """What a repository scan found, each keyed by component context.

    ``devfiles`` maps a context to devfile content, ``devfile_urls`` to the
    registry URL of a devfile that was matched rather than found, and
    ``dockerfiles`` to a Dockerfile path or a link to a matched Dockerfile.
    """

    devfiles: dict[str, bytes] = field(default_factory=dict)
    devfile_urls: dict[str, str] = field(default_factory=dict)
    dockerfiles: dict[str, str] = field(default_factory=dict)


def _search(
    alizer: Alizer, localpath: str, current_level: int, depth: int, devfile_registry_url: str
) -> ScanResult:
    result = ScanResult()
    is_devfile_present = False
    is_dockerfile_present = False

    with os.scandir(localpath) as it:
        entries = sorted(it, key=lambda entry: entry.name)

    context = get_context(localpath, current_level)

    for entry in entries:
        name = entry.name
        is_dir = entry.is_dir(follow_symlinks=False)
        full_path = os.path.join(localpath, name)

        if current_level != 0 and name in (DEVFILE_NAME, HIDDEN_DEVFILE_NAME):
            with open(full_path, "rb") as handle:
                result.devfiles[context] = handle.read()
            is_devfile_present = True
        elif current_level != 0 and is_dir and name == HIDDEN_DEVFILE_DIR:
            # .devfile/ counts as the same level as the directory holding it.
            nested = _search(alizer, full_path, current_level, depth, devfile_registry_url)
            if HIDDEN_DEVFILE_DIR in nested.devfiles:
                result.devfiles[context] = nested.devfiles[HIDDEN_DEVFILE_DIR]
                if HIDDEN_DEVFILE_DIR in nested.devfile_urls:
                    result.devfile_urls[context] = nested.devfile_urls[HIDDEN_DEVFILE_DIR]
                is_devfile_present = True
        elif current_level != 0 and name == DOCKERFILE_NAME:
            # Differently named Dockerfiles are found later through the devfile.
            result.dockerfiles[context] = posixpath.join(context, DOCKERFILE_NAME)
            is_dockerfile_present = True
        elif is_dir and current_level + 1 <= depth:
            nested = _search(alizer, full_path, current_level + 1, depth, devfile_registry_url)
            for nested_context, content in nested.devfiles.items():
                result.devfiles[nested_context] = content
                if nested_context in nested.devfile_urls:
                    result.devfile_urls[nested_context] = nested.devfile_urls[nested_context]
                is_devfile_present = True
            for nested_context, uri in nested.dockerfiles.items():
                result.dockerfiles[nested_context] = uri
                is_dockerfile_present = True

    # With both present, the Dockerfile must still be referenced from the devfile.
    if is_devfile_present and is_dockerfile_present and current_level == depth:
        result.dockerfiles.pop(context, None)
        is_dockerfile_present = False

    if not result.devfiles and current_level == 0:
        raise NoDevfileFound(localpath)
    if not is_dockerfile_present and current_level == depth:
        analyze_path(
            alizer,
            localpath,
            context,
            devfile_registry_url,
            result,
            is_devfile_present,
            is_dockerfile_present,
        )

    return result


def scan_repo(
    alizer: Alizer, localpath: str, depth: int, devfile_registry_url: str
) -> ScanResult:
    """Find devfiles and Dockerfiles under ``localpath`` down to ``depth`` levels.

    Components lacking a devfile or Dockerfile are matched against the devfile
    registry using ``alizer``. Raises NoDevfileFound if no devfile results.
    """
    return _search(alizer, localpath, 0, depth, devfile_registry_url)


def analyze_path(
    alizer: Alizer,
    localpath: str,
    context: str,
    devfile_registry_url: str,
    result: ScanResult,
    is_devfile_present: bool,
    is_dockerfile_present: bool,
) -> None:
    """Fill in a missing devfile or Dockerfile for ``context`` in ``result``."""
    if is_devfile_present:
        if search_for_dockerfile(result.devfiles[context]):
            is_dockerfile_present = True

    if is_dockerfile_present:
        return

    try:
        devfile, endpoint, sample_name = analyze_and_detect_devfile(
            alizer, localpath, devfile_registry_url
        )
    except NoDevfileFound:
        return

    if not devfile:
        return
    if not is_devfile_present:
        # Registry samples always carry a Dockerfile entry of their own.
        result.devfiles[context] = devfile
        result.devfile_urls[context] = endpoint
    else:
        sample_repo = get_repo_from_registry(sample_name, devfile_registry_url)
        dockerfile_uri = search_for_dockerfile(devfile)
        result.dockerfiles[context] = update_dockerfile_link(sample_repo, "", dockerfile_uri)


def search_for_dockerfile(devfile: bytes) -> str:
    """Return the Dockerfile URI of the first image component that sets one, else ''."""
    data = parse_devfile_model(devfile.decode("utf-8"))
    for component in data.get_components("image"):
        image = component.get("image") or {}
        dockerfile = image.get("dockerfile") or {} if isinstance(image, dict) else {}
        uri = dockerfile.get("uri") if isinstance(dockerfile, dict) else None
        if uri:
            return str(uri)
    return ""


def analyze_and_detect_devfile(
    alizer: Alizer, path: str, devfile_registry_url: str
) -> tuple[bytes, str, str]:
    """Match the project at ``path`` with a registry devfile.

    Returns the devfile content, its registry URL and the sample name. Raises
    NoDevfileFound when nothing in the registry fits.
    """
    languages = alizer.analyze(path)
    devfile_types = get_alizer_devfile_types(devfile_registry_url)
    no_match_message = f"No valid devfile found for project in {path}"

    for language in languages:
        if not language.can_be_component:
            continue
        try:
            detected = alizer.select_devfile_from_types(path, devfile_types)
        except Exception as err:
            if str(err) != no_match_message:
                raise
            detected = None
        if detected is None or detected == DevfileType(name=""):
            continue
        endpoint = f"{devfile_registry_url}/devfiles/{detected.name}"
        content = curl_endpoint(endpoint)
        if content:
            return content, endpoint, detected.name

    raise NoDevfileFound(path)
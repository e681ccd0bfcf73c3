"""Devfile documents: parsing, validation, generation and download."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import requests
import yaml

from appservice.errors import NoDevfileFound
from appservice.util import EndpointError, curl_endpoint

DEVFILE_NAME = "devfile.yaml"
HIDDEN_DEVFILE_NAME = ".devfile.yaml"
HIDDEN_DEVFILE_DIR = ".devfile"
DOCKERFILE_NAME = "Dockerfile"

DEVFILE = DEVFILE_NAME
HIDDEN_DEVFILE = HIDDEN_DEVFILE_NAME
HIDDEN_DIR_DEVFILE = f"{HIDDEN_DEVFILE_DIR}/{DEVFILE_NAME}"
HIDDEN_DIR_HIDDEN_DEVFILE = f"{HIDDEN_DEVFILE_DIR}/{HIDDEN_DEVFILE_NAME}"

VALID_DEVFILE_LOCATIONS = (DEVFILE, HIDDEN_DEVFILE, HIDDEN_DIR_DEVFILE, HIDDEN_DIR_HIDDEN_DEVFILE)

DEVFILE_REGISTRY_ENDPOINT = "https://registry.devfile.io"
DEVFILE_STAGE_REGISTRY_ENDPOINT = "https://registry.stage.devfile.io"

SCHEMA_VERSION_210 = "2.1.0"
SCHEMA_VERSION_220 = "2.2.0"

COMPONENT_TYPES = ("container", "kubernetes", "openshift", "volume", "image", "plugin", "custom")
COMMAND_TYPES = ("exec", "apply", "composite", "custom")

_SUPPORTED_MAJOR_MINOR = {(2, 0), (2, 1), (2, 2)}
_VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)(?:-[0-9A-Za-z.-]+)?$")
_KNOWN_KEYS = {"schemaVersion", "metadata", "components", "commands"}


class DevfileError(Exception):
    """Raised when a devfile cannot be parsed or is invalid."""


def _single_type(entry: dict, types: tuple[str, ...], what: str, label: str) -> str:
    found = [t for t in types if t in entry]
    if len(found) != 1:
        raise DevfileError(f"{what} {label!r} must define exactly one of {', '.join(types)}")
    return found[0]


@dataclass
class DevfileData:
    """The content of a devfile: schema version, metadata, components and commands."""

    schema_version: str
    metadata: dict[str, Any] = field(default_factory=dict)
    components: list[dict[str, Any]] = field(default_factory=list)
    commands: list[dict[str, Any]] = field(default_factory=list)
    extras: dict[str, Any] = field(default_factory=dict)

    def get_components(self, component_type: str | None = None) -> list[dict[str, Any]]:
        """Return the components, only those of ``component_type`` if given."""
        return [
            c for c in self.components
            if component_type is None or component_type in c
        ]

    def get_commands(self, command_type: str | None = None) -> list[dict[str, Any]]:
        """Return the commands, only those of ``command_type`` if given."""
        return [
            c for c in self.commands
            if command_type is None or command_type in c
        ]

    def to_yaml(self) -> str:
        """Serialise the devfile as YAML."""
        doc: dict[str, Any] = {"schemaVersion": self.schema_version}
        if self.metadata:
            doc["metadata"] = self.metadata
        doc.update(self.extras)
        if self.components:
            doc["components"] = self.components
        if self.commands:
            doc["commands"] = self.commands
        return yaml.safe_dump(doc, sort_keys=False)

    def _validate(self) -> None:
        match = _VERSION_PATTERN.match(self.schema_version)
        if not match or (int(match[1]), int(match[2])) not in _SUPPORTED_MAJOR_MINOR:
            raise DevfileError(f"unsupported devfile schema version {self.schema_version!r}")

        names: set[str] = set()
        for component in self.components:
            if not isinstance(component, dict):
                raise DevfileError("each component must be a mapping")
            name = component.get("name")
            if not isinstance(name, str) or not name:
                raise DevfileError("each component must have a name")
            if name in names:
                raise DevfileError(f"duplicate component name {name!r}")
            names.add(name)
            _single_type(component, COMPONENT_TYPES, "component", name)

        ids: set[str] = set()
        for command in self.commands:
            if not isinstance(command, dict):
                raise DevfileError("each command must be a mapping")
            command_id = command.get("id")
            if not isinstance(command_id, str) or not command_id:
                raise DevfileError("each command must have an id")
            if command_id in ids:
                raise DevfileError(f"duplicate command id {command_id!r}")
            ids.add(command_id)
            kind = _single_type(command, COMMAND_TYPES, "command", command_id)
            if kind in ("exec", "apply"):
                body = command[kind] or {}
                target = body.get("component") if isinstance(body, dict) else None
                if target not in names:
                    raise DevfileError(
                        f"command {command_id!r} references unknown component {target!r}"
                    )


def parse_devfile_model(devfile_model: str) -> DevfileData:
    """Parse and validate devfile YAML text."""
    try:
        raw = yaml.safe_load(devfile_model)
    except yaml.YAMLError as err:
        raise DevfileError(f"unable to parse devfile: {err}") from err
    if not isinstance(raw, dict):
        raise DevfileError("devfile content must be a mapping")

    version = raw.get("schemaVersion")
    if not isinstance(version, str):
        raise DevfileError("devfile must set schemaVersion as a string")
    metadata = raw.get("metadata") or {}
    components = raw.get("components") or []
    commands = raw.get("commands") or []
    if not isinstance(metadata, dict):
        raise DevfileError("metadata must be a mapping")
    if not isinstance(components, list) or not isinstance(commands, list):
        raise DevfileError("components and commands must be lists")

    data = DevfileData(
        schema_version=version,
        metadata=dict(metadata),
        components=list(components),
        commands=list(commands),
        extras={k: v for k, v in raw.items() if k not in _KNOWN_KEYS},
    )
    data._validate()
    return data


def _metadata(name: str, description: str = "", attributes: dict | None = None) -> dict:
    metadata: dict[str, Any] = {}
    if name:
        metadata["name"] = name
    if description:
        metadata["description"] = description
    if attributes:
        metadata["attributes"] = attributes
    return metadata


def convert_application_to_devfile(
    display_name: str,
    description: str,
    git_ops_repo: str,
    app_model_repo: str,
    app_model_branch: str = "",
    app_model_context: str = "",
    git_ops_branch: str = "",
    git_ops_context: str = "",
) -> DevfileData:
    """Build the application devfile that records its GitOps and app-model repositories."""
    attributes = {
        "gitOpsRepository.url": git_ops_repo,
        "appModelRepository.url": app_model_repo,
    }
    if app_model_branch:
        attributes["appModelRepository.branch"] = app_model_branch
    attributes["appModelRepository.context"] = app_model_context or "/"
    if git_ops_branch:
        attributes["gitOpsRepository.branch"] = git_ops_branch
    attributes["gitOpsRepository.context"] = git_ops_context or "./"

    return DevfileData(
        schema_version=SCHEMA_VERSION_210,
        metadata=_metadata(display_name, description, attributes),
    )


def convert_image_component_to_devfile(component_name: str, container_image: str) -> DevfileData:
    """Build a devfile holding a single container component for a prebuilt image."""
    return DevfileData(
        schema_version=SCHEMA_VERSION_210,
        metadata=_metadata(component_name),
        components=[{"name": "container", "container": {"image": container_image}}],
    )


def create_devfile_for_dockerfile_build(uri: str, context: str) -> DevfileData:
    """Build a devfile that builds an image from the Dockerfile at ``uri``."""
    data = DevfileData(
        schema_version=SCHEMA_VERSION_220,
        metadata=_metadata("dockerfile-component", "Basic Devfile for a Dockerfile Component"),
        components=[
            {
                "name": "dockerfile-build",
                "image": {"dockerfile": {"uri": uri, "buildContext": context}},
            },
            {"name": "container", "container": {"image": "no-op"}},
        ],
        commands=[{"id": "build-image", "apply": {"component": "dockerfile-build"}}],
    )
    data._validate()
    return data


def download_file(file: str) -> bytes:
    """Download ``file`` over HTTP."""
    return curl_endpoint(file)


def download_devfile(directory: str) -> bytes:
    """Download the devfile from the first valid location under ``directory``."""
    for location in VALID_DEVFILE_LOCATIONS:
        try:
            return download_file(f"{directory}/{location}")
        except (EndpointError, requests.RequestException):
            continue
    raise NoDevfileFound(directory)


def download_devfile_and_dockerfile(url: str) -> tuple[bytes | None, bytes | None]:
    """Download the devfile and Dockerfile at the root of ``url``; missing ones are None."""
    try:
        devfile = download_devfile(url)
    except NoDevfileFound:
        devfile = None
    try:
        dockerfile = download_file(f"{url}/{DOCKERFILE_NAME}")
    except (EndpointError, requests.RequestException):
        dockerfile = None
    return devfile, dockerfile
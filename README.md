# appservice

A library for working with devfiles and with the Git repositories that hold an
application's source and GitOps configuration.

## Modules

- **`appservice.detect`**: `scan_repo(alizer, localpath, depth, devfile_registry_url)`
  walks a local checkout down to `depth` levels. For each component directory,
  it looks for `devfile.yaml`, `.devfile.yaml`, a `.devfile/` directory and a
  `Dockerfile`. Where a context has no devfile, or has a devfile that names no
  Dockerfile, it asks an `Alizer` to match a sample from the devfile registry.
  The result is a `ScanResult` with three dictionaries keyed by context:
  - `devfiles`: the devfile content.
  - `devfile_urls`: the registry URL of a matched devfile.
  - `dockerfiles`: a Dockerfile path or a raw link to one.

  `scan_repo` raises `NoDevfileFound` when nothing is found. The module also
  provides these helpers:
  - `analyze_path`
  - `analyze_and_detect_devfile`
  - `search_for_dockerfile`: returns the Dockerfile URI of the first image
    component that sets one, or `""`.
- **`appservice.devfile`**: `parse_devfile_model` parses and validates devfile
  YAML into a `DevfileData`. It checks the schema version (2.0 to 2.2), that
  component names and command ids are unique, that each entry has exactly one
  type, and that apply and exec commands point at known components. It raises
  `DevfileError` on failure.
  - `DevfileData.get_components(component_type)` and
    `DevfileData.get_commands(command_type)` filter by type.
  - `DevfileData.to_yaml()` serialises the devfile.
  - Builders: `convert_application_to_devfile`, `convert_image_component_to_devfile`
    and `create_devfile_for_dockerfile_build`.
  - Downloads: `download_file`, `download_devfile` and
    `download_devfile_and_dockerfile`. `download_devfile` tries the four valid
    devfile locations in turn.
- **`appservice.registry`**:
  - `get_alizer_devfile_types` reads a registry's sample index as `DevfileType`
    entries.
  - `get_repo_from_registry` returns a sample's origin remote and raises
    `LookupError` if the sample has none.
  - `get_context` builds a component context from a path and a level.
  - `update_dockerfile_link` turns a repository URL and a relative Dockerfile
    path into a raw link.
- **`appservice.spi`**: `download_file_using_spi`, `download_devfile_using_spi`
  and `download_devfile_and_dockerfile_using_spi` fetch files through any
  subclass of `SPI` that implements `get_file_contents`.
- **`appservice.github`**:
  - `GitHubClient` creates and deletes repositories through the GitHub REST
    API. It can be used as a context manager, and HTTP failures raise
    `requests.HTTPError`.
  - `generate_new_repository_name` builds a name from the display name, the
    namespace and two random verbs.
  - `generate_new_repository` creates a public repository and returns its web
    URL.
  - `get_repo_name_from_url` raises `ValueError` when the organisation is not
    in the URL.
  - `delete_repository` deletes a repository.
- **`appservice.util`**:
  - `sanitize_name`
  - `is_exist`
  - `convert_github_url`: turns a GitHub URL into its raw-content form.
  - `curl_endpoint`: raises `EndpointError` on any status but 200.
  - `check_with_regex`
- **`appservice.ioutils`**: a `Filesystem` interface with three
  implementations:
  - `OsFilesystem`, the local disk.
  - `MemoryFilesystem`, held in memory.
  - `ReadOnlyFilesystem`, which raises `PermissionError` on every write.

  It also provides `create_temp_path` and `is_existing`. `is_existing` returns
  `False` for a missing path and raises `FileExistsError` for an existing file
  or directory.
- **`appservice.errors`**: `NoFileFound`, `NoDevfileFound` and
  `NoDockerfileFound`. Each carries a `location` and an optional causing `err`.

## Installation

```
pip install .
```

## Examples

```python
from appservice.util import sanitize_name

sanitize_name("PetClinic App")   # "petclinic-app"
```

```python
from appservice.devfile import create_devfile_for_dockerfile_build

devfile = create_devfile_for_dockerfile_build("docker/Dockerfile", "./")
print(devfile.to_yaml())
```

```python
from appservice.detect import search_for_dockerfile

with open("devfile.yaml", "rb") as handle:
    print(search_for_dockerfile(handle.read()))
```

## What it does not do

- This is a library only. It has no command-line tool, no long-running
  service and no Kubernetes resource handling.
- It does not clone repositories. `scan_repo` expects a checkout that is
  already on disk.
- It ships no language analyser. `Alizer` and `SPI` are abstract, so you
  supply the implementations.

## Running the tests

```
pip install ".[test]"
pytest
```
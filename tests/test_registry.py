import pytest
import responses

from appservice.registry import (
    DevfileType,
    get_alizer_devfile_types,
    get_context,
    get_repo_from_registry,
    update_dockerfile_link,
)
from appservice.util import EndpointError

SERVER = "http://127.0.0.1:9080"


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.mark.parametrize(
    "level, expected",
    [(1, "dir"), (2, "a/dir"), (0, "./")],
)
def test_get_context(level, expected):
    assert get_context("/tmp/path/to/a/dir", level) == expected


def test_update_dockerfile_link_relative():
    link = update_dockerfile_link(
        "https://github.com/maysunfaisal/multi-components-dockerfile/",
        "",
        "devfile-sample-java-springboot-basic/docker/Dockerfile",
    )
    assert link == (
        "https://raw.githubusercontent.com/maysunfaisal/multi-components-dockerfile/main/"
        "devfile-sample-java-springboot-basic/docker/Dockerfile"
    )


def test_update_dockerfile_link_absolute():
    absolute = (
        "https://raw.githubusercontent.com/maysunfaisal/multi-components-dockerfile/main/"
        "devfile-sample-java-springboot-basic/docker/Dockerfile"
    )
    link = update_dockerfile_link(
        "https://github.com/maysunfaisal/multi-components-dockerfile/", "", absolute
    )
    assert link == absolute


def test_update_dockerfile_link_with_revision():
    link = update_dockerfile_link("https://github.com/org/repo", "dev", "Dockerfile")
    assert link == "https://raw.githubusercontent.com/org/repo/dev/Dockerfile"


def test_update_dockerfile_link_error():
    with pytest.raises(ValueError):
        update_dockerfile_link("\000x", "", "test/dir")


def test_get_alizer_devfile_types(mocked):
    mocked.get(
        f"{SERVER}/index/sample",
        json=[
            {"name": "sampleindex1", "projectType": "project1", "language": "language1"},
            {"name": "sampleindex2", "projectType": "project2", "language": "language2"},
        ],
    )
    mocked.get(f"{SERVER}/index/stack", json=[{"name": "stackindex1"}])
    assert get_alizer_devfile_types(SERVER) == [
        DevfileType(name="sampleindex1", project_type="project1", language="language1"),
        DevfileType(name="sampleindex2", project_type="project2", language="language2"),
    ]


def test_get_alizer_devfile_types_keeps_tags(mocked):
    mocked.get(f"{SERVER}/index/sample", json=[{"name": "s", "tags": ["Java", "Maven"]}])
    assert get_alizer_devfile_types(SERVER)[0].tags == ["Java", "Maven"]


def test_get_alizer_devfile_types_not_a_url():
    with pytest.raises(ValueError):
        get_alizer_devfile_types("127.0.0.1:9080")


def test_get_alizer_devfile_types_server_error(mocked):
    mocked.get(f"{SERVER}/index/sample", status=500)
    with pytest.raises(EndpointError):
        get_alizer_devfile_types(SERVER)


INDEX = [
    {
        "name": "index1",
        "projectType": "project1",
        "language": "language1",
        "git": {"remotes": {"origin": "repo"}},
    },
    {"name": "index2", "projectType": "project2", "language": "language2"},
]


def test_get_repo_from_registry(mocked):
    mocked.get(f"{SERVER}/index/sample", json=INDEX)
    assert get_repo_from_registry("index1", SERVER) == "repo"


def test_get_repo_from_registry_no_remote(mocked):
    mocked.get(f"{SERVER}/index/sample", json=INDEX)
    with pytest.raises(LookupError, match="index2"):
        get_repo_from_registry("index2", SERVER)


def test_get_repo_from_registry_not_a_url():
    with pytest.raises(ValueError):
        get_repo_from_registry("", "127.0.0.1:9080")
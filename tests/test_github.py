import json
import re

import pytest
import requests
import responses

from appservice.github import (
    GitHubClient,
    delete_repository,
    generate_new_repository,
    generate_new_repository_name,
    get_repo_name_from_url,
)

ORG = "redhat-appstudio-appdata"


def _create_callback(request):
    body = request.body.decode() if isinstance(request.body, bytes) else request.body
    if "test-error-response" in body:
        return 500, {}, json.dumps({"message": "github went belly up or something"})
    return 201, {"Content-Type": "application/json"}, json.dumps({"name": "test-repo-1"})


def _delete_callback(request):
    if request.path_url == f"/repos/{ORG}/test-repo-1":
        return 200, {"Content-Type": "application/json"}, json.dumps({"name": "test-repo-1"})
    return 404, {}, json.dumps({"message": "Not Found"})


@pytest.fixture
def mocked_github():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        mock.add_callback(
            responses.POST,
            re.compile(r"https://api\.github\.com/orgs/[^/]+/repos"),
            callback=_create_callback,
        )
        mock.add_callback(
            responses.DELETE,
            re.compile(r"https://api\.github\.com/repos/.*"),
            callback=_delete_callback,
        )
        yield mock


@pytest.fixture
def client():
    return GitHubClient(token="token")


def test_generate_new_repository_name():
    name = generate_new_repository_name("PetClinic", "default")
    assert name.startswith("petclinic-default-")
    assert len(name.split("-")) == 4


def test_generate_new_repository_name_sanitizes():
    name = generate_new_repository_name("Pet Clinic", "ns")
    assert name.startswith("pet-clinic-ns-")


def test_generate_new_repository(mocked_github, client):
    url = generate_new_repository(client, ORG, "test-repo-1", "")
    assert url == "https://github.com/redhat-appstudio-appdata/test-repo-1"
    sent = json.loads(mocked_github.calls[0].request.body)
    assert sent == {"name": "test-repo-1", "private": False, "description": ""}
    assert mocked_github.calls[0].request.headers["Authorization"] == "token token"


def test_generate_new_repository_fails(mocked_github, client):
    with pytest.raises(requests.HTTPError):
        generate_new_repository(client, ORG, "test-error-response", "")


def test_delete_repository(mocked_github, client):
    result = delete_repository(client, ORG, "test-repo-1")
    assert result is None
    assert len(mocked_github.calls) == 1
    sent = mocked_github.calls[0].request
    assert sent.method == "DELETE"
    assert sent.url == f"https://api.github.com/repos/{ORG}/test-repo-1"
    assert mocked_github.calls[0].response.status_code == 200


def test_delete_repository_invalid_name(mocked_github, client):
    with pytest.raises(requests.HTTPError):
        delete_repository(client, ORG, "https://github.com/invalid/url")


def test_get_repo_name_from_url():
    assert (
        get_repo_name_from_url("https://github.com/redhat-appstudio-appdata/test-repo-1", ORG)
        == "test-repo-1"
    )


def test_get_repo_name_from_url_invalid_org():
    with pytest.raises(ValueError):
        get_repo_name_from_url("https://github.com/redhat-appstudio-appdata/test-repo-1", "fakeorg")
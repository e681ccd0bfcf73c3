import pytest

from appservice.errors import NoDevfileFound, NoDockerfileFound, NoFileFound


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (NoDevfileFound("/path"), "unable to find devfile in the specified location /path"),
        (
            NoDevfileFound("/path", ValueError("a dummy err")),
            "unable to find devfile in the specified location /path due to a dummy err",
        ),
        (
            NoDockerfileFound("/path"),
            "unable to find dockerfile in the specified location /path",
        ),
        (
            NoDockerfileFound("/path", ValueError("a dummy err")),
            "unable to find dockerfile in the specified location /path due to a dummy err",
        ),
        (NoFileFound("/path"), "unable to find file in the specified location /path"),
        (
            NoFileFound("/path", ValueError("a dummy err")),
            "unable to find file in the specified location /path due to a dummy err",
        ),
    ],
)
def test_error_messages(error, expected):
    assert str(error) == expected


def test_error_keeps_location_and_cause():
    cause = OSError("boom")
    error = NoDevfileFound("/repo", cause)
    assert error.location == "/repo"
    assert error.err is cause


def test_error_without_cause_has_no_err():
    error = NoFileFound("https://example.com/repo")
    assert error.location == "https://example.com/repo"
    assert error.err is None
    assert str(error) == (
        "unable to find file in the specified location https://example.com/repo"
    )
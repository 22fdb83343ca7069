"""Tests for FakeHttpClient defaults relied on by gateway tests."""

import pytest

from gitlab_tags.gateway.gitlab.errors import NotFoundError
from gitlab_tags.gateway.http.fake import FakeHttpClient


def test_unconfigured_get_raises_not_found() -> None:
    with pytest.raises(NotFoundError):
        FakeHttpClient().get("projects/1")


def test_page_specific_response_wins_over_default() -> None:
    http_client = FakeHttpClient()
    http_client.set_response("items", response=["default"])
    http_client.set_response("items", response=["second"], page=2)

    assert http_client.get("items", params={"page": 1}).body == ["default"]
    assert http_client.get("items", params={"page": 2}).body == ["second"]


def test_unconfigured_writes_echo_and_succeed() -> None:
    http_client = FakeHttpClient()

    posted = http_client.post("items", data={"a": 1})
    deleted = http_client.delete("items/1")

    assert posted.status_code == 201
    assert posted.body == {"a": 1}
    assert deleted.status_code == 204
    assert [r.method for r in http_client.requests] == ["POST", "DELETE"]

"""
Tests for the Redmine client.
"""
import json

import httpx
import pendulum
import pytest
import respx

from redline.client.redmine import RedmineAPIError, RedmineClient, login

BASE_URL = "https://redmine.test"


def raw_issue(id, **fields):
    issue = {
        "id": id,
        "subject": f"Issue {id}",
        "project": {"id": 1, "name": "Alpha"},
        "status": {"id": 1, "name": "New"},
        "priority": {"id": 2, "name": "Normal"},
        "done_ratio": 0,
    }
    issue.update(fields)
    return issue


@pytest.fixture
def client():
    with RedmineClient(BASE_URL, api_key="test_key") as redmine_client:
        yield redmine_client


@respx.mock
def test_get_user_sends_api_key(client):
    route = respx.get(f"{BASE_URL}/users/current.json").mock(
        return_value=httpx.Response(
            200, json={"user": {"id": 7, "login": "jdoe", "api_key": "k"}}
        )
    )

    user = client.get_user()

    assert user["id"] == 7
    assert user["login"] == "jdoe"
    assert route.calls[0].request.headers["X-Redmine-API-Key"] == "test_key"


@respx.mock
def test_get_issues_follows_pages(client):
    route = respx.get(host="redmine.test", path="/issues.json").mock(
        side_effect=[
            httpx.Response(
                200,
                json={"issues": [raw_issue(1), raw_issue(2)], "total_count": 3},
            ),
            httpx.Response(200, json={"issues": [raw_issue(3)], "total_count": 3}),
        ]
    )

    issues = client.get_issues()

    assert [issue["id"] for issue in issues] == [1, 2, 3]
    first, second = (call.request.url.params for call in route.calls)
    assert first["offset"] == "0"
    assert second["offset"] == "2"
    assert first["watcher_id"] == "me"
    assert first["status_id"] == "*"


@respx.mock
def test_issue_fields_are_converted(client):
    respx.get(f"{BASE_URL}/issues/5.json").mock(
        return_value=httpx.Response(
            200,
            json={
                "issue": raw_issue(
                    5,
                    assigned_to={"id": 7, "name": "J Doe"},
                    due_date="2024-01-20",
                    estimated_hours=2.5,
                )
            },
        )
    )

    issue = client.get_issue(5)

    assert issue["assigned_to"] == {"id": 7, "name": "J Doe"}
    assert issue["due_date"] == "2024-01-20"
    assert issue["estimated_hours"] == 2.5
    assert issue["description"] is None


@respx.mock
def test_update_issue_puts_partial_body(client):
    route = respx.put(f"{BASE_URL}/issues/5.json").mock(
        return_value=httpx.Response(204)
    )

    client.update_issue(5, {"status_id": 3})

    assert json.loads(route.calls[0].request.content) == {"issue": {"status_id": 3}}


@respx.mock
def test_time_entries_query_covers_days_back(client):
    route = respx.get(host="redmine.test", path="/time_entries.json").mock(
        return_value=httpx.Response(
            200,
            json={
                "time_entries": [
                    {
                        "id": 1,
                        "hours": 1.5,
                        "spent_on": "2024-01-09",
                        "user": {"id": 7, "name": "J Doe"},
                        "project": {"id": 1, "name": "Alpha"},
                        "activity": {"id": 9, "name": "Dev"},
                        "issue": {"id": 5},
                    },
                    {
                        "id": 2,
                        "hours": 1,
                        "spent_on": "2024-01-10",
                        "project": {"id": 1, "name": "Alpha"},
                    },
                ],
                "total_count": 2,
            },
        )
    )

    entries = client.get_time_entries(7, today=pendulum.date(2024, 1, 10))

    assert [entry["issue_id"] for entry in entries] == [5, None]
    assert entries[1]["hours"] == 1.0
    params = route.calls[0].request.url.params
    assert params["spent_on"] == "><2024-01-03|2024-01-10"
    assert params["user_id"] == "me"


@pytest.mark.parametrize(
    "status_code,code",
    [
        (401, "unauthorized"),
        (403, "forbidden"),
        (404, "not_found"),
        (422, "validation_error"),
        (500, "upstream_error"),
    ],
)
@respx.mock
def test_status_codes_map_to_errors(client, status_code, code):
    respx.get(f"{BASE_URL}/issue_statuses.json").mock(
        return_value=httpx.Response(status_code, json={"errors": ["nope"]})
    )

    with pytest.raises(RedmineAPIError) as exc_info:
        client.get_issue_statuses()

    assert exc_info.value.code == code
    assert exc_info.value.status_code == status_code


@respx.mock
def test_transport_error(client):
    respx.get(host="redmine.test", path="/projects.json").mock(
        side_effect=httpx.ConnectError("refused")
    )

    with pytest.raises(RedmineAPIError) as exc_info:
        client.get_projects()

    assert exc_info.value.code == "transport_error"


@respx.mock
def test_malformed_payload_is_a_decode_error(client):
    respx.get(f"{BASE_URL}/users/current.json").mock(
        return_value=httpx.Response(200, text="<html>")
    )

    with pytest.raises(RedmineAPIError) as exc_info:
        client.get_user()

    assert exc_info.value.code == "decode_error"


@respx.mock
def test_login_returns_api_key():
    route = respx.get(f"{BASE_URL}/users/current.json").mock(
        return_value=httpx.Response(
            200, json={"user": {"id": 7, "login": "jdoe", "api_key": "abc123"}}
        )
    )

    assert login(BASE_URL, "jdoe", "pw") == "abc123"
    assert route.calls[0].request.headers["Authorization"].startswith("Basic ")

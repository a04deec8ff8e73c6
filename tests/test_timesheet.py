import json

import pendulum
import pytest
from conftest import (
    SERVER_URL,
    USER_ID,
    FakeClient,
    make_entry,
    make_issue,
    make_project,
    make_snapshot,
)

from redline.service.span import parse_span
from redline.service.timesheet import (
    NO_ISSUE_NAME,
    backfill_missing_issues,
    find_missing_issue_ids,
    generate_timesheet,
    get_timesheet,
    span_items,
    timesheet_items,
)

TODAY = pendulum.date(2024, 1, 10)


def sample_snapshot():
    return make_snapshot(
        issues=[
            make_issue(10, "Issue X"),
            make_issue(11, "Issue Y"),
            make_issue(20, "Issue Z", project_id=2, project_name="Beta"),
        ],
        projects=[make_project(1, "Alpha"), make_project(2, "Beta")],
        time_entries=[
            make_entry(1, "2024-01-01", 2.0, issue_id=10),
            make_entry(2, "2024-01-02", 3.0, issue_id=11),
            make_entry(3, "2024-01-03", 1.0, 2, "Beta", issue_id=20),
        ],
    )


def cache_of(snapshot):
    return {"refreshed": None, **snapshot}


def test_totals_within_span():
    span = parse_span("2024-01-01..2024-01-02", TODAY)

    sheet = generate_timesheet(cache_of(sample_snapshot()), span)

    assert sheet["total"] == 5.0
    assert [p["name"] for p in sheet["projects"]] == ["Alpha"]
    alpha = sheet["projects"][0]
    assert alpha["total"] == 5.0
    assert [(i["name"], i["total"]) for i in alpha["issues"]] == [
        ("Issue X", 2.0),
        ("Issue Y", 3.0),
    ]
    assert alpha["project"]["id"] == 1


def test_buckets_keep_first_seen_order_and_accumulate():
    snapshot = sample_snapshot()
    snapshot["time_entries"] = [
        make_entry(1, "2024-01-03", 1.0, 2, "Beta", issue_id=20),
        make_entry(2, "2024-01-03", 0.5, issue_id=11),
        make_entry(3, "2024-01-03", 0.25, issue_id=10),
        make_entry(4, "2024-01-03", 1.5, issue_id=11),
        make_entry(5, "2024-01-03", 1.0),
    ]

    sheet = generate_timesheet(cache_of(snapshot), parse_span("3/1", TODAY))

    assert [p["name"] for p in sheet["projects"]] == ["Beta", "Alpha"]
    alpha = sheet["projects"][1]
    assert [(i["id"], i["total"]) for i in alpha["issues"]] == [
        (11, 2.0),
        (10, 0.25),
        (None, 1.0),
    ]
    assert alpha["issues"][2]["name"] == NO_ISSUE_NAME
    assert alpha["total"] == 3.25
    assert sheet["total"] == 4.25


def test_find_missing_issue_ids_is_distinct():
    snapshot = sample_snapshot()
    snapshot["time_entries"] += [
        make_entry(4, "2024-01-04", 1.0, issue_id=30),
        make_entry(5, "2024-01-04", 1.0, issue_id=30),
        make_entry(6, "2024-01-04", 1.0, issue_id=31),
    ]
    assert find_missing_issue_ids(cache_of(snapshot)) == [30, 31]


def test_backfill_appends_fetched_issues(cache_repo, now):
    snapshot = sample_snapshot()
    snapshot["time_entries"].append(make_entry(4, "2024-01-02", 1.0, issue_id=30))
    cache_repo.replace(snapshot, now)
    client = FakeClient(extra_issues=[make_issue(30, "Old issue")])

    sheet = get_timesheet(cache_repo, client, parse_span("2/1", TODAY))

    assert client.calls == ["get_issue"]
    assert cache_repo.get_issue(30)["subject"] == "Old issue"
    names = [i["name"] for i in sheet["projects"][0]["issues"]]
    assert names == ["Issue Y", "Old issue"]


def test_backfill_failure_adds_nothing(cache_repo, now):
    snapshot = sample_snapshot()
    snapshot["time_entries"].append(make_entry(4, "2024-01-02", 1.0, issue_id=30))
    cache_repo.replace(snapshot, now)
    before = cache_repo.get_cache()

    with pytest.raises(RuntimeError):
        backfill_missing_issues(cache_repo, FakeClient(fail="get_issue"))

    assert cache_repo.get_cache() == before


def test_timesheet_items_lists_projects_behind_a_total():
    span = parse_span("2024-01-01..2024-01-03", TODAY)
    sheet = generate_timesheet(cache_of(sample_snapshot()), span)

    items = timesheet_items(sheet, span, "", SERVER_URL, USER_ID)

    assert [item["title"] for item in items] == [
        "Total hours 2024-01-01..2024-01-03: 6.00",
        "Alpha",
        "Beta",
    ]
    assert items[1]["subtitle"] == "5.00"
    action = json.loads(items[0]["arg"]["data"])
    assert action["url"] == (
        f"{SERVER_URL}/timesheet/report?timesheet[date_from]=2024-01-01"
        "&timesheet[date_to]=2024-01-03&timesheet[sort]=project"
        f"&timesheet[users][]={USER_ID}"
    )
    assert json.loads(items[2]["arg"]["data"]) == {"span": span, "project_id": 2}


def test_timesheet_items_total_covers_filtered_projects():
    span = parse_span("2024-01-01..2024-01-03", TODAY)
    sheet = generate_timesheet(cache_of(sample_snapshot()), span)

    items = timesheet_items(sheet, span, "bet", SERVER_URL, USER_ID)

    assert [item["title"] for item in items] == [
        "Total hours 2024-01-01..2024-01-03: 1.00",
        "Beta",
    ]


def test_timesheet_items_for_one_project():
    span = parse_span("week", TODAY)
    snapshot = sample_snapshot()
    snapshot["time_entries"] = [
        make_entry(1, "2024-01-09", 2.0, issue_id=10),
        make_entry(2, "2024-01-09", 1.0, issue_id=11),
    ]
    sheet = generate_timesheet(cache_of(snapshot), span)

    items = timesheet_items(sheet, span, "y", SERVER_URL, USER_ID, project_id=1)

    assert [item["title"] for item in items] == [
        "Total hours this week on Alpha: 1.00",
        "Issue Y",
    ]
    assert json.loads(items[1]["arg"]["data"])["url"] == f"{SERVER_URL}/issues/11"


def test_timesheet_items_without_entries():
    span = parse_span("today", TODAY)
    sheet = generate_timesheet(cache_of(sample_snapshot()), span)

    items = timesheet_items(sheet, span, "", SERVER_URL, USER_ID)

    assert [item["title"] for item in items] == ["No entries"]


def test_span_suggestions():
    assert [i["title"] for i in span_items("", SERVER_URL, USER_ID, TODAY)] == [
        "today",
        "yesterday",
        "this week",
    ]
    assert [i["title"] for i in span_items("yd", SERVER_URL, USER_ID, TODAY)] == [
        "yesterday"
    ]
    items = span_items("1/1..5/1", SERVER_URL, USER_ID, TODAY)
    assert [i["title"] for i in items] == ["1/1..5/1"]
    assert json.loads(items[0]["arg"]["data"])["span"]["to"] == "2024-01-05"


def test_span_suggestion_reports_parse_errors():
    items = span_items("99/99", SERVER_URL, USER_ID, TODAY)
    assert items[0]["subtitle"] == "Error"

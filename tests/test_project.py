import json

import pendulum
from conftest import SERVER_URL, make_issue, make_project, make_snapshot

from redline.service.project import partition_projects, project_items

TODAY = pendulum.date(2024, 1, 10)


def sample_cache():
    snapshot = make_snapshot(
        issues=[
            make_issue(1, project_id=2, project_name="Beta", due_date="2024-01-20"),
            make_issue(2, project_id=2, project_name="Beta", status_id=2),
            make_issue(3, project_id=2, project_name="Beta", due_date="2024-01-12"),
            make_issue(4, project_id=1, project_name="Alpha", status_id=2),
            make_issue(5, project_id=3, project_name="Gamma"),
        ],
        projects=[
            make_project(1, "Alpha"),
            make_project(2, "Beta"),
            make_project(3, "Gamma"),
            make_project(4, "Delta"),
        ],
    )
    return {"refreshed": None, **snapshot}


def test_partition():
    active, recently_active = partition_projects(sample_cache())

    assert [project["name"] for project in active] == ["Beta", "Gamma"]
    assert [project["name"] for project in recently_active] == ["Alpha"]


def test_project_items():
    items = project_items(sample_cache(), "", SERVER_URL, TODAY)

    assert [(item["title"], item["subtitle"]) for item in items] == [
        ("Beta", "2 issues, first is due Friday"),
        ("Gamma", "1 issues"),
        ("Alpha", None),
    ]
    assert items[0]["arg"]["keyword"] == "issues"
    assert json.loads(items[0]["arg"]["data"]) == {"project_id": 2}
    assert json.loads(items[0]["alt_arg"]["data"])["url"] == f"{SERVER_URL}/projects/2"


def test_project_items_match_name():
    items = project_items(sample_cache(), "gm", SERVER_URL, TODAY)
    assert [item["title"] for item in items] == ["Gamma"]

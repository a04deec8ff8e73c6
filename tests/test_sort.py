from conftest import USER_ID, make_issue

from redline.query.sort import lookup, sort_issues, sort_items


def ids(issues):
    return [issue["id"] for issue in issues]


def test_lookup_resolves_dotted_columns():
    issue = make_issue(1, priority_id=4)
    assert lookup(issue, "priority.id") == 4
    assert lookup(issue, "assigned_to.id") is None


def test_sort_items_puts_missing_values_last():
    items = [{"due": None}, {"due": "2024-02-01"}, {"due": ""}, {"due": "2024-01-01"}]
    assert [item["due"] for item in sort_items(items, ["due"])] == [
        "2024-01-01",
        "2024-02-01",
        None,
        "",
    ]


def test_own_issues_rank_first_regardless_of_priority_and_due_date():
    issues = [
        make_issue(1, priority_id=5, due_date="2024-01-01"),
        make_issue(2, priority_id=1, assigned_to_id=USER_ID),
        make_issue(3, priority_id=3, assigned_to_id=99),
    ]
    assert ids(sort_issues(issues, USER_ID)) == [2, 1, 3]


def test_higher_priority_first_then_earlier_due_date():
    issues = [
        make_issue(1, priority_id=2, due_date="2024-03-01"),
        make_issue(2, priority_id=2, due_date="2024-01-15"),
        make_issue(3, priority_id=4),
        make_issue(4, priority_id=2),
        make_issue(5, priority_id=2, due_date="2024-01-15"),
    ]
    # 3 by priority; 2 and 5 tie on date so keep their order; undated 4 last
    assert ids(sort_issues(issues, USER_ID)) == [3, 2, 5, 1, 4]


def test_sort_is_idempotent():
    issues = [
        make_issue(1, priority_id=1, due_date="2024-02-01"),
        make_issue(2, priority_id=3, assigned_to_id=USER_ID),
        make_issue(3, priority_id=3, due_date="2024-01-01"),
        make_issue(4, priority_id=1),
        make_issue(5, priority_id=3, assigned_to_id=USER_ID, due_date="2024-05-01"),
    ]
    once = sort_issues(issues, USER_ID)
    assert ids(sort_issues(once, USER_ID)) == ids(once)
    assert ids(once) == [5, 2, 3, 1, 4]


def test_no_user_means_no_assignment_pass():
    issues = [make_issue(1, assigned_to_id=USER_ID), make_issue(2, priority_id=3)]
    assert ids(sort_issues(issues, None)) == [2, 1]

# SPDX-License-Identifier: MIT

from redline.model.span import Span

# Open issues assigned to the current user, with the columns worth scanning
ISSUES_QUERY = (
    "/issues?utf8=✓&set_filter=1"
    "&f[]=assigned_to_id&op[assigned_to_id]==&v[assigned_to_id][]=me"
    "&f[]=status_id&op[status_id]=o&f[]="
    "&c[]=project&c[]=status&c[]=priority&c[]=subject&c[]=updated_on"
    "&c[]=due_date&c[]=estimated_hours&c[]=spent_hours&c[]=done_ratio"
    "&group_by="
)


def issues_url(server_url: str) -> str:
    return server_url.rstrip("/") + ISSUES_QUERY


def issue_url(server_url: str, issue_id: int) -> str:
    return f"{server_url.rstrip('/')}/issues/{issue_id}"


def project_url(server_url: str, project_id: int) -> str:
    return f"{server_url.rstrip('/')}/projects/{project_id}"


def timesheet_url(server_url: str, span: Span, user_id: int) -> str:
    return (
        f"{server_url.rstrip('/')}/timesheet/report"
        f"?timesheet[date_from]={span['from']}"
        f"&timesheet[date_to]={span['to']}"
        "&timesheet[sort]=project"
        f"&timesheet[users][]={user_id}"
    )

# SPDX-License-Identifier: MIT

from redline.model.timesheet import Timesheet


def get_timesheet_template() -> Timesheet:
    return {"total": 0.0, "projects": []}

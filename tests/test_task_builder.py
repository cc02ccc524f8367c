"""Unit tests for building FormattedTasks from RTM responses."""

import pytest

from rtm_bridge.api import MalformedResponseError
from rtm_bridge.tasks import (
    MISSING_LIST_ID,
    TaskRef,
    build_tasks,
    format_due,
    format_priority,
)
from tests.rtm_test_helpers import buy_milk_tasks_response, ok


def _series(id="33", name="Task", task=None, **extra):
    series = {"id": id, "name": name, "task": task or {"id": "55", "priority": "N", "due": ""}}
    series.update(extra)
    return series


class TestFormatDue:
    def test_empty(self):
        assert format_due("") == ""

    def test_datetime_keeps_date_part(self):
        assert format_due("2024-05-01T00:00:00Z") == " 📅 2024-05-01"

    def test_date_without_time(self):
        assert format_due("2024-05-01") == " 📅 2024-05-01"


class TestFormatPriority:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1", " 🔺"),
            ("2", " 🔼"),
            ("3", " 🔽"),
            ("", ""),
            ("N", ""),
            ("4", ""),
            ("01", ""),
        ],
    )
    def test_mapping(self, raw, expected):
        assert format_priority(raw) == expected


class TestBuildTasks:
    """Tests for build_tasks()."""

    def test_buy_milk_scenario(self):
        tasks = build_tasks(buy_milk_tasks_response(), {"101": "Inbox"})

        assert len(tasks) == 1
        task = tasks[0]
        assert task.name == "Buy milk"
        assert task.priority == " 🔺"
        assert task.due == " 📅 2024-05-01"
        assert task.list_name == "Inbox"
        assert task.tags == ("errand",)
        assert task.rtm_id == TaskRef("101", "33", "55")
        assert task.raw_priority == "1"
        assert task.raw_due == "2024-05-01T00:00:00Z"

    @pytest.mark.parametrize(
        "raw,expected",
        [("1", " 🔺"), ("2", " 🔼"), ("3", " 🔽"), ("", ""), ("anything-else", "")],
    )
    def test_priority_outcomes(self, raw, expected):
        response = ok(
            tasks={"list": {"id": "1", "taskseries": _series(task={"id": "9", "priority": raw})}}
        )
        assert build_tasks(response, {})[0].priority == expected

    def test_absent_tasks_collection_is_empty(self):
        assert build_tasks(ok(), {}) == []

    def test_tasks_without_list_is_empty(self):
        assert build_tasks(ok(tasks={"rev": "x"}), {}) == []

    def test_missing_rsp_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            build_tasks({}, {})

    def test_preserves_source_order_across_lists(self):
        response = ok(
            tasks={
                "list": [
                    {"id": "1", "taskseries": [_series(id="a", name="A"), _series(id="b", name="B")]},
                    {"id": "2", "taskseries": _series(id="c", name="C")},
                ]
            }
        )
        assert [t.name for t in build_tasks(response, {})] == ["A", "B", "C"]

    def test_list_without_series_is_skipped(self):
        response = ok(tasks={"list": [{"id": "1"}, {"id": "2", "taskseries": _series(name="Only")}]})
        assert [t.name for t in build_tasks(response, {})] == ["Only"]

    def test_first_occurrence_wins(self):
        series = _series(
            task=[
                {"id": "1", "priority": "3", "due": "2024-06-01T00:00:00Z"},
                {"id": "2", "priority": "1", "due": "2024-01-01T00:00:00Z"},
            ]
        )
        task = build_tasks(ok(tasks={"list": {"id": "1", "taskseries": series}}), {})[0]
        assert task.rtm_id.task_id == "1"
        assert task.priority == " 🔽"
        assert task.due == " 📅 2024-06-01"

    def test_series_without_occurrence_is_skipped(self):
        series = {"id": "33", "name": "Ghost"}
        assert build_tasks(ok(tasks={"list": {"id": "1", "taskseries": series}}), {}) == []

    def test_list_id_falls_back_to_series(self):
        response = ok(tasks={"list": {"taskseries": _series(list_id="202")}})
        task = build_tasks(response, {"202": "Work"})[0]
        assert task.rtm_id.list_id == "202"
        assert task.list_name == "Work"

    def test_list_id_sentinel_when_absent(self):
        response = ok(tasks={"list": {"taskseries": _series()}})
        task = build_tasks(response, {})[0]
        assert task.rtm_id.list_id == MISSING_LIST_ID
        assert task.list_name == ""

    def test_containing_list_id_preferred(self):
        response = ok(tasks={"list": {"id": "101", "taskseries": _series(list_id="999")}})
        assert build_tasks(response, {})[0].rtm_id.list_id == "101"

    def test_unknown_list_has_empty_name(self):
        task = build_tasks(buy_milk_tasks_response(), {"999": "Other"})[0]
        assert task.list_name == ""

    def test_single_tag_string(self):
        response = ok(tasks={"list": {"id": "1", "taskseries": _series(tags={"tag": "home"})}})
        assert build_tasks(response, {})[0].tags == ("home",)

    def test_empty_tags_array(self):
        """Untagged series carry ``"tags": []`` instead of an object."""
        response = ok(tasks={"list": {"id": "1", "taskseries": _series(tags=[])}})
        assert build_tasks(response, {})[0].tags == ()

    def test_missing_due_and_priority(self):
        response = ok(tasks={"list": {"id": "1", "taskseries": _series(task={"id": "9"})}})
        task = build_tasks(response, {})[0]
        assert task.due == ""
        assert task.priority == ""
        assert task.raw_due == ""
        assert task.raw_priority == ""

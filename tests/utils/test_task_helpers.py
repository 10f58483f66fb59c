"""Tests for task reference resolution."""

import pytest

from chomper.utils.errors import TaskNotFoundError
from chomper.utils.task_helpers import _find_shortest_unique_suffix, resolve_task


@pytest.fixture
def tasks(task_factory):
    return [
        task_factory("first", id="aaaa-1234"),
        task_factory("second", id="bbbb-5678"),
        task_factory("third", id="cccc-9678"),
    ]


def test_resolves_list_number(tasks):
    assert resolve_task(tasks, "2").text == "second"


def test_resolves_full_id(tasks):
    assert resolve_task(tasks, "cccc-9678").text == "third"


def test_resolves_unique_suffix(tasks):
    assert resolve_task(tasks, "1234").text == "first"


def test_out_of_range_number_is_tried_as_suffix(tasks):
    assert resolve_task(tasks, "5678").text == "second"


def test_number_uses_listed_order(tasks):
    numbered = [tasks[2], tasks[0]]

    assert resolve_task(tasks, "1", numbered).text == "third"
    assert resolve_task(tasks, "2", numbered).text == "first"


def test_listed_task_that_is_gone(tasks):
    with pytest.raises(TaskNotFoundError, match="no longer exists"):
        resolve_task(tasks, "1", [None, tasks[0]])


def test_no_match(tasks):
    with pytest.raises(TaskNotFoundError, match="No task found"):
        resolve_task(tasks, "zzz")


def test_ambiguous_suffix_lists_suggestions(tasks):
    with pytest.raises(TaskNotFoundError) as exc_info:
        resolve_task(tasks, "678")

    message = str(exc_info.value)
    assert "Multiple tasks match" in message
    assert "[5678] second" in message
    assert "[9678] third" in message


def test_shortest_unique_suffix():
    ids = ["abc1", "xyz1", "abc2"]
    assert _find_shortest_unique_suffix(ids, "abc2") == "2"
    assert _find_shortest_unique_suffix(ids, "abc1") == "c1"

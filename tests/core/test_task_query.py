"""Task Query — tests for list filter normalization.

Tests cover:
    - text stripped; blank or None text means no filter
    - status and priority carried through unchanged
"""

from taskshare.core.domain_types import TaskPriority, TaskStatus
from taskshare.core.task_query import TaskQuery


def test_build_strips_text():
    assert TaskQuery.build("  report ").text == "report"


def test_blank_text_is_no_filter():
    assert TaskQuery.build("   ").text is None
    assert TaskQuery.build(None).text is None


def test_filters_carried_through():
    query = TaskQuery.build(None, TaskStatus.DONE, TaskPriority.HIGH)
    assert query.status is TaskStatus.DONE
    assert query.priority is TaskPriority.HIGH


def test_default_query_has_no_filters():
    assert TaskQuery() == TaskQuery.build()

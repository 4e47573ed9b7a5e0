"""Task Patch — tests for per-field presence, validation and application.

Tests cover:
    - PatchField: absent vs explicit null vs value
    - apply_patch: absent fields untouched, present fields overwrite (incl. null)
    - tags replaced wholesale, null clears
    - title trimmed; blank title rejected by validate_patch
    - status/priority/completed cannot be nulled
    - completed maps to status; contradicting status + completed rejected
    - empty patch leaves state equal
"""

from datetime import datetime, timezone

from taskshare.core.domain_types import TaskPriority, TaskStatus
from taskshare.core.errors import TaskValidationError
from taskshare.core.task_patch import (
    ABSENT,
    PatchField,
    TaskPatch,
    TaskState,
    apply_patch,
    check_completed_agrees,
    check_non_nullable,
    check_title,
    normalize_title,
    validate_patch,
)


def _state(**overrides) -> TaskState:
    base = dict(
        title="Write report",
        description="Quarterly numbers",
        status=TaskStatus.TODO,
        priority=TaskPriority.MED,
        tags=("work", "q3"),
        category="office",
        metadata='{"color":"blue"}',
    )
    base.update(overrides)
    return TaskState(**base)


def _patch(**values) -> TaskPatch:
    return TaskPatch(**{k: PatchField.of(v) for k, v in values.items()})


# ─── PatchField ──────────────────────────────────────────────────

def test_absent_field_is_not_present():
    assert ABSENT.present is False
    assert TaskPatch().title is ABSENT


def test_explicit_null_is_present():
    field = PatchField.of(None)
    assert field.present is True
    assert field.value is None
    assert field != ABSENT


def test_present_fields_lists_only_sent_fields():
    patch = _patch(description=None, tags=["a"])
    assert sorted(patch.present_fields) == ["description", "tags"]


# ─── apply_patch ─────────────────────────────────────────────────

def test_empty_patch_leaves_state_unchanged():
    state = _state()
    assert apply_patch(state, TaskPatch()) == state


def test_absent_fields_are_untouched():
    state = _state()
    result = apply_patch(state, _patch(priority=TaskPriority.HIGH))
    assert result.priority is TaskPriority.HIGH
    assert result.title == state.title
    assert result.description == state.description
    assert result.tags == state.tags
    assert result.metadata == state.metadata


def test_explicit_null_clears_nullable_field():
    result = apply_patch(_state(), _patch(description=None))
    assert result.description is None
    assert result.category == "office"


def test_null_tags_clear_the_list():
    assert apply_patch(_state(), _patch(tags=None)).tags == ()


def test_tags_replace_whole_sequence_in_order():
    result = apply_patch(_state(), _patch(tags=["b", "a", "b"]))
    assert result.tags == ("b", "a", "b")


def test_title_is_trimmed():
    assert apply_patch(_state(), _patch(title="  New  ")).title == "New"


def test_due_date_and_metadata_are_patchable():
    due = datetime(2030, 1, 1, tzinfo=timezone.utc)
    result = apply_patch(_state(), _patch(due_date=due, metadata=None))
    assert result.due_date == due
    assert result.metadata is None


def test_apply_patch_does_not_mutate_input():
    state = _state()
    apply_patch(state, _patch(title="Other"))
    assert state.title == "Write report"


def test_completed_true_sets_done():
    assert apply_patch(_state(), _patch(completed=True)).status is TaskStatus.DONE


def test_completed_false_sets_todo():
    state = _state(status=TaskStatus.DONE)
    assert apply_patch(state, _patch(completed=False)).status is TaskStatus.TODO


def test_explicit_status_wins_over_completed():
    result = apply_patch(_state(), _patch(status=TaskStatus.DONE, completed=True))
    assert result.status is TaskStatus.DONE


# ─── Validation ──────────────────────────────────────────────────

def test_normalize_title():
    assert normalize_title("  x ") == "x"
    assert normalize_title("   ") is None
    assert normalize_title(None) is None


def test_blank_title_rejected():
    error = check_title(_patch(title="   "))
    assert isinstance(error, TaskValidationError)
    assert error.field == "title"


def test_null_title_rejected():
    assert check_title(_patch(title=None)) is not None


def test_absent_title_passes():
    assert check_title(TaskPatch()) is None


def test_null_status_rejected():
    error = check_non_nullable(_patch(status=None))
    assert error is not None
    assert error.field == "status"


def test_null_completed_rejected():
    assert check_non_nullable(_patch(completed=None)).field == "completed"


def test_contradicting_completed_rejected():
    error = check_completed_agrees(
        _patch(status=TaskStatus.IN_PROGRESS, completed=True),
    )
    assert error is not None
    assert error.field == "completed"


def test_agreeing_completed_passes():
    assert check_completed_agrees(
        _patch(status=TaskStatus.TODO, completed=False),
    ) is None


def test_validate_patch_returns_first_error():
    error = validate_patch(_patch(title="", status=None))
    assert error.field == "title"


def test_validate_patch_passes_valid_patch():
    assert validate_patch(_patch(title="ok", tags=None, description=None)) is None

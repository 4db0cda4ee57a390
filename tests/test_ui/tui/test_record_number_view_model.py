from __future__ import annotations

import pytest

from logininfo.settings.actions import ActionResponse
from logininfo.settings.namespace import OwnedNamespace
from logininfo.ui.tui.state.record_number_view_model import (
    REQUIRED_MESSAGE,
    TAB_ID,
    WHOLE_NUMBER_MESSAGE,
    RecordNumberViewModel,
)

pytestmark = pytest.mark.tui_fast


class _Submitter:
    def __init__(self, response: ActionResponse | None = None, error: Exception | None = None) -> None:
        self.calls: list[dict] = []
        self.response = response or ActionResponse(status=200)
        self.error = error

    def __call__(self, values):
        self.calls.append(dict(values))
        if self.error is not None:
            raise self.error
        return self.response


def test_defaults_until_loaded() -> None:
    vm = RecordNumberViewModel(_Submitter(), default_value="10")
    assert vm.persisted_value == "10"
    assert vm.draft_value == "10"
    assert not vm.is_dirty


def test_load_takes_stored_value() -> None:
    vm = RecordNumberViewModel(_Submitter())
    vm.load(OwnedNamespace(record_number="15"))
    assert vm.persisted_value == "15"
    assert vm.draft_value == "15"


def test_load_without_value_falls_back_to_default() -> None:
    vm = RecordNumberViewModel(_Submitter(), default_value="7")
    vm.load(OwnedNamespace())
    assert vm.persisted_value == "7"


def test_set_draft_marks_dirty_and_reset_restores() -> None:
    vm = RecordNumberViewModel(_Submitter())
    result = vm.set_draft(" 25 ")

    assert result.changed_tabs == (TAB_ID,)
    assert vm.draft_value == "25"
    assert vm.is_dirty

    assert vm.reset().changed_tabs == (TAB_ID,)
    assert vm.draft_value == "10"
    assert not vm.is_dirty
    assert vm.reset().changed_tabs == ()


def test_set_same_value_changes_nothing() -> None:
    vm = RecordNumberViewModel(_Submitter())
    assert vm.set_draft("10").changed_tabs == ()


def test_save_submits_draft() -> None:
    submit = _Submitter()
    vm = RecordNumberViewModel(submit)
    vm.set_draft("25")

    result = vm.save()

    assert result.handled
    assert result.error is None
    assert submit.calls == [{"recordNumber": "25"}]
    assert vm.persisted_value == "25"
    assert not vm.is_dirty


def test_save_rejects_empty_draft() -> None:
    submit = _Submitter()
    vm = RecordNumberViewModel(submit)
    vm.set_draft("")

    result = vm.save()

    assert not result.handled
    assert result.error == REQUIRED_MESSAGE
    assert submit.calls == []


def test_save_rejects_non_integer_draft() -> None:
    submit = _Submitter()
    vm = RecordNumberViewModel(submit)
    vm.set_draft("12a")

    assert vm.save().error == WHOLE_NUMBER_MESSAGE
    assert submit.calls == []


def test_save_reports_rejected_response() -> None:
    vm = RecordNumberViewModel(_Submitter(ActionResponse(status=403, error="Forbidden")))
    vm.set_draft("50")

    result = vm.save()

    assert result.error == "Failed to save: Forbidden"
    assert vm.persisted_value == "10"
    assert vm.is_dirty


def test_save_reports_submit_exception() -> None:
    vm = RecordNumberViewModel(_Submitter(error=RuntimeError("connection reset")))
    vm.set_draft("50")
    assert vm.save().error == "Failed to save: connection reset"

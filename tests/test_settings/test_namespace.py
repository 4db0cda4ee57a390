from __future__ import annotations

import pytest

from logininfo.settings.errors import RecordNumberValidationError
from logininfo.settings.namespace import (
    NAMESPACE_KEY,
    RECORD_NUMBER_KEY,
    OwnedNamespace,
    merge_owned_namespace,
    normalize_record_number,
)


def test_from_options_reads_record_number() -> None:
    namespace = OwnedNamespace.from_options({NAMESPACE_KEY: {RECORD_NUMBER_KEY: "15", "note": "x"}})
    assert namespace.record_number == "15"
    assert namespace.extras == {"note": "x"}
    assert namespace.is_initialized


@pytest.mark.parametrize(
    "options",
    [None, {}, {NAMESPACE_KEY: None}, {NAMESPACE_KEY: "corrupt"}, {NAMESPACE_KEY: {}}],
)
def test_from_options_without_value_is_uninitialized(options) -> None:
    namespace = OwnedNamespace.from_options(options)
    assert namespace.record_number is None
    assert not namespace.is_initialized


def test_empty_string_is_not_initialized() -> None:
    assert not OwnedNamespace.from_options({NAMESPACE_KEY: {RECORD_NUMBER_KEY: ""}}).is_initialized


def test_to_dict_keeps_extras() -> None:
    namespace = OwnedNamespace(record_number="7", extras={"note": "x"})
    assert namespace.to_dict() == {"note": "x", RECORD_NUMBER_KEY: "7"}


def test_merge_preserves_sibling_features() -> None:
    options = {"otherFeature": {"x": 1}, "title": "Host"}
    merged = merge_owned_namespace(options, {RECORD_NUMBER_KEY: "25"})

    assert merged == {
        "otherFeature": {"x": 1},
        "title": "Host",
        NAMESPACE_KEY: {RECORD_NUMBER_KEY: "25"},
    }


def test_merge_preserves_sibling_keys_inside_namespace() -> None:
    options = {NAMESPACE_KEY: {RECORD_NUMBER_KEY: "10", "note": "keep"}}
    merged = merge_owned_namespace(options, {RECORD_NUMBER_KEY: "11"})
    assert merged[NAMESPACE_KEY] == {RECORD_NUMBER_KEY: "11", "note": "keep"}


def test_merge_does_not_mutate_input() -> None:
    options = {"otherFeature": {"x": 1}, NAMESPACE_KEY: {RECORD_NUMBER_KEY: "10"}}
    merged = merge_owned_namespace(options, {RECORD_NUMBER_KEY: "11"})
    merged["otherFeature"]["x"] = 2

    assert options == {"otherFeature": {"x": 1}, NAMESPACE_KEY: {RECORD_NUMBER_KEY: "10"}}


def test_merge_replaces_non_mapping_namespace() -> None:
    merged = merge_owned_namespace({NAMESPACE_KEY: "corrupt"}, {RECORD_NUMBER_KEY: "3"})
    assert merged[NAMESPACE_KEY] == {RECORD_NUMBER_KEY: "3"}


def test_merge_into_nothing() -> None:
    assert merge_owned_namespace(None, {RECORD_NUMBER_KEY: "10"}) == {NAMESPACE_KEY: {RECORD_NUMBER_KEY: "10"}}


@pytest.mark.parametrize(("value", "expected"), [("10", "10"), (" 25 ", "25"), (50, "50"), ("007", "007")])
def test_normalize_record_number_accepts_whole_numbers(value, expected) -> None:
    assert normalize_record_number(value) == expected


@pytest.mark.parametrize("value", [None, "", "   ", "abc", "1.5", "-3", True, "١٢"])
def test_normalize_record_number_rejects_other_values(value) -> None:
    with pytest.raises(RecordNumberValidationError):
        normalize_record_number(value)


def test_validation_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        normalize_record_number("x")

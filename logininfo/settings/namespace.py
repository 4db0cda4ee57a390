"""
The ``pluginLoginInfo`` namespace inside the shared settings options.

Every write this feature makes goes through ``merge_owned_namespace`` so that
keys owned by other features are carried over untouched.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .errors import RecordNumberValidationError

NAMESPACE_KEY = "pluginLoginInfo"
RECORD_NUMBER_KEY = "recordNumber"


@dataclass(frozen=True)
class OwnedNamespace:
    """Typed view of ``options["pluginLoginInfo"]``."""

    record_number: Optional[str] = None
    extras: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]]) -> "OwnedNamespace":
        raw = (options or {}).get(NAMESPACE_KEY)
        if not isinstance(raw, Mapping):
            return cls()
        value = raw.get(RECORD_NUMBER_KEY)
        extras = {key: deepcopy(item) for key, item in raw.items() if key != RECORD_NUMBER_KEY}
        return cls(
            record_number=None if value is None else str(value),
            extras=extras,
        )

    @property
    def is_initialized(self) -> bool:
        """True once a non-empty record number is stored."""
        return bool(self.record_number)

    def to_dict(self) -> dict[str, Any]:
        data = deepcopy(self.extras)
        if self.record_number is not None:
            data[RECORD_NUMBER_KEY] = self.record_number
        return data


def merge_owned_namespace(options: Optional[Mapping[str, Any]], values: Mapping[str, Any]) -> dict[str, Any]:
    """
    Return a copy of *options* with *values* merged into the owned namespace.

    Sibling keys under ``options`` and under the namespace are preserved. A
    namespace value that is not a mapping is replaced.
    """
    merged = deepcopy(dict(options or {}))
    current = merged.get(NAMESPACE_KEY)
    namespace = dict(current) if isinstance(current, Mapping) else {}
    namespace.update(deepcopy(dict(values)))
    merged[NAMESPACE_KEY] = namespace
    return merged


def normalize_record_number(value: Any) -> str:
    """
    Validate a record number and return its canonical string form.

    Raises:
        RecordNumberValidationError: If the value is empty or not a
            non-negative decimal integer.
    """
    if value is None or isinstance(value, bool):
        raise RecordNumberValidationError("recordNumber is required")
    text = str(value).strip()
    if not text:
        raise RecordNumberValidationError("recordNumber is required")
    if not (text.isascii() and text.isdigit()):
        raise RecordNumberValidationError(f"recordNumber must be a whole number, got {text!r}")
    return text

"""Data models for the valuecompare engine."""

from __future__ import annotations

import dataclasses
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .exceptions import OptionsError
from .path import Path
from .values import tag_name

DEFAULT_ERROR_TEMPLATE = "Submitted values do not match: %{path}"
PATH_PLACEHOLDER = "%{path}"


class DivergenceKind(Enum):
    VALUE_MISMATCH = "value_mismatch"
    MISSING_KEY = "missing_key"
    EXTRA_KEY = "extra_key"
    TYPE_MISMATCH = "type_mismatch"
    STRUCT_TYPE_MISMATCH = "struct_type_mismatch"
    DATETIME_MISMATCH = "datetime_mismatch"
    LIST_LENGTH_MISMATCH = "list_length_mismatch"
    UNMATCHED_LIST_ITEM = "unmatched_list_item"


@dataclass(frozen=True)
class ComparisonOptions:
    """Per-call configuration, read-only for the whole traversal."""
    strict_list_order: bool = False
    truncate_timestamp_subsecond: bool = True
    exhaustive: bool = False
    error_template: str = DEFAULT_ERROR_TEMPLATE
    max_depth: int = 100

    def __post_init__(self):
        for name in ("strict_list_order", "truncate_timestamp_subsecond", "exhaustive"):
            if not isinstance(getattr(self, name), bool):
                raise OptionsError(f"Option '{name}' must be a boolean", name)
        if not isinstance(self.error_template, str):
            raise OptionsError("Option 'error_template' must be a string", "error_template")
        if (
            not isinstance(self.max_depth, int)
            or isinstance(self.max_depth, bool)
            or self.max_depth < 1
        ):
            raise OptionsError("Option 'max_depth' must be a positive integer", "max_depth")

    @classmethod
    def option_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls))

    @classmethod
    def from_dict(cls, data: dict) -> ComparisonOptions:
        """Build options from a mapping, rejecting unknown keys."""
        unknown = sorted(set(data) - set(cls.option_names()))
        if unknown:
            raise OptionsError(f"Unknown option(s): {', '.join(unknown)}", unknown[0])
        return cls(**data)

    def replace(self, **changes) -> ComparisonOptions:
        unknown = sorted(set(changes) - set(self.option_names()))
        if unknown:
            raise OptionsError(f"Unknown option(s): {', '.join(unknown)}", unknown[0])
        return dataclasses.replace(self, **changes)

    def render_message(self, path: Path) -> str:
        return self.error_template.replace(PATH_PLACEHOLDER, path.render())


@dataclass
class Divergence:
    """A single difference found during comparison."""
    path: Path
    kind: DivergenceKind
    expected: Any = None
    actual: Any = None

    def to_dict(self) -> dict:
        return {
            "path": self.path.render(),
            "kind": self.kind.value,
            "expected": _reportable(self.expected),
            "actual": _reportable(self.actual),
        }


def _reportable(value: Any) -> Any:
    # record tags may be classes
    return tag_name(value) if isinstance(value, type) else value


@dataclass
class Verdict:
    """Outcome of one traversal: a path in first-divergence mode, a list otherwise."""
    equal: bool
    path: Optional[Path] = None
    divergences: list[Divergence] = field(default_factory=list)


@dataclass
class ComparisonResult:
    """Complete comparison result."""
    is_match: bool
    message: Optional[str] = None
    path: Optional[Path] = None
    divergences: list[Divergence] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.is_match

    def summary(self) -> dict[str, int]:
        """Count divergences per kind."""
        return dict(Counter(d.kind.value for d in self.divergences))

    def to_dict(self) -> dict:
        result = {"is_match": self.is_match}
        if self.message is not None:
            result["message"] = self.message
        if self.path is not None:
            result["path"] = self.path.render()
        if self.divergences:
            result["divergences"] = [d.to_dict() for d in self.divergences]
        return result


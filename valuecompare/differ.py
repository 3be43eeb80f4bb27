"""Typed deep comparison of two value trees."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Optional, Union

from .comparators import compare_scalars, compare_timestamps
from .exceptions import MaxDepthExceededError
from .matcher import SequenceMatcher
from .models import ComparisonOptions, Divergence, DivergenceKind, Verdict
from .path import Index, Key, Path, ROOT, Segment
from .values import ValueKind, kind_of, record_fields, record_tag

logger = logging.getLogger(__name__)

NOT_A_RECORD = "not a record"
LIST_DESCRIPTION = "list"
CONTAINERS = (ValueKind.MAPPING, ValueKind.SEQUENCE)


class Differ:
    """
    Walks two value trees in lock-step.

    Dispatch is by the pair's combined shape, in this order:
    - both timestamps
    - both tagged records
    - one record against a non-container (type mismatch)
    - both mappings
    - both sequences
    - one sequence against a non-mapping (type mismatch)
    - anything else is compared as scalars

    In first-divergence mode the walk stops at the first violated rule
    and `divergences` holds that single divergence. In exhaustive mode
    the walk continues and `divergences` collects all of them.
    """

    def __init__(
        self,
        options: ComparisonOptions,
        base_path: Path = ROOT,
        depth: int = 0,
        quiet: bool = False
    ):
        self.options = options
        self.exhaustive = options.exhaustive
        self.divergences: list[Divergence] = []
        self.nodes_checked = 0

        self._segments: list[Segment] = list(base_path.segments)
        self._depth = depth
        self._quiet = quiet
        self._equivalence_options: Optional[ComparisonOptions] = None
        self._matcher = SequenceMatcher(self)

    def run(self, old: Any, new: Any) -> bool:
        """
        Top-level entry point around `diff`.

        Raises:
            MaxDepthExceededError: if nesting exceeds options.max_depth or
                the interpreter stack runs out first
        """
        try:
            return self.diff(old, new)
        except RecursionError as e:
            raise MaxDepthExceededError(
                self.options.max_depth, self.current_path.render()
            ) from e

    @property
    def current_path(self) -> Path:
        return Path(tuple(self._segments))

    def diff(self, old: Any, new: Any) -> bool:
        """
        Compare two values at the current path.

        Returns:
            True if the values are equal under the configured rules
        """
        if self._depth > self.options.max_depth:
            raise MaxDepthExceededError(self.options.max_depth, self.current_path.render())

        self.nodes_checked += 1
        old_kind = kind_of(old)
        new_kind = kind_of(new)

        if old_kind is ValueKind.TIMESTAMP and new_kind is ValueKind.TIMESTAMP:
            return self._diff_timestamps(old, new)

        if old_kind is ValueKind.RECORD and new_kind is ValueKind.RECORD:
            return self._diff_records(old, new)

        if old_kind is ValueKind.RECORD and new_kind not in CONTAINERS:
            return self.fail(DivergenceKind.TYPE_MISMATCH, record_tag(old), NOT_A_RECORD)
        if new_kind is ValueKind.RECORD and old_kind not in CONTAINERS:
            return self.fail(DivergenceKind.TYPE_MISMATCH, NOT_A_RECORD, record_tag(new))

        if old_kind is ValueKind.MAPPING and new_kind is ValueKind.MAPPING:
            return self._diff_mappings(old, new)

        if old_kind is ValueKind.SEQUENCE and new_kind is ValueKind.SEQUENCE:
            return self._diff_sequences(old, new)

        if old_kind is ValueKind.SEQUENCE and new_kind is not ValueKind.MAPPING:
            return self.fail(DivergenceKind.TYPE_MISMATCH, LIST_DESCRIPTION, repr(new))
        if new_kind is ValueKind.SEQUENCE and old_kind is not ValueKind.MAPPING:
            return self.fail(DivergenceKind.TYPE_MISMATCH, repr(old), LIST_DESCRIPTION)

        if compare_scalars(old, new):
            return True
        return self.fail(DivergenceKind.VALUE_MISMATCH, old, new)

    def equivalent(self, old: Any, new: Any) -> bool:
        """Full first-divergence comparison that keeps no diagnostics."""
        options = self.options
        if options.exhaustive:
            if self._equivalence_options is None:
                self._equivalence_options = options.replace(exhaustive=False)
            options = self._equivalence_options
        checker = Differ(options, self.current_path, self._depth, quiet=True)
        return checker.diff(old, new)

    @contextmanager
    def descend(self, segment: Segment):
        self._segments.append(segment)
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
            self._segments.pop()

    def fail(self, kind: DivergenceKind, expected: Any, actual: Any) -> bool:
        """Record a divergence at the current path. Always returns False."""
        divergence = Divergence(
            path=self.current_path,
            kind=kind,
            expected=expected,
            actual=actual,
        )
        self.divergences.append(divergence)
        if not self._quiet and logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s at %r", kind.value, divergence.path.render())
        return False

    def fail_at(
        self,
        segment: Segment,
        kind: DivergenceKind,
        expected: Any,
        actual: Any
    ) -> bool:
        with self.descend(segment):
            return self.fail(kind, expected, actual)

    def _diff_timestamps(self, old: Any, new: Any) -> bool:
        if compare_timestamps(old, new, self.options.truncate_timestamp_subsecond):
            return True
        return self.fail(DivergenceKind.DATETIME_MISMATCH, old, new)

    def _diff_records(self, old: Any, new: Any) -> bool:
        old_tag = record_tag(old)
        new_tag = record_tag(new)
        if old_tag != new_tag:
            return self.fail(DivergenceKind.STRUCT_TYPE_MISMATCH, old_tag, new_tag)
        return self._diff_mappings(record_fields(old), record_fields(new))

    def _diff_mappings(self, old: Any, new: Any) -> bool:
        missing = [key for key in old if key not in new]
        extra = [key for key in new if key not in old]

        if not self.exhaustive:
            if missing:
                key = missing[0]
                return self.fail_at(Key(key), DivergenceKind.MISSING_KEY, old[key], None)
            if extra:
                key = extra[0]
                return self.fail_at(Key(key), DivergenceKind.EXTRA_KEY, None, new[key])
            for key in old:
                with self.descend(Key(key)):
                    if not self.diff(old[key], new[key]):
                        return False
            return True

        for key in missing:
            self.fail_at(Key(key), DivergenceKind.MISSING_KEY, old[key], None)
        for key in extra:
            self.fail_at(Key(key), DivergenceKind.EXTRA_KEY, None, new[key])

        all_match = not missing and not extra
        for key in old:
            if key not in new:
                continue
            with self.descend(Key(key)):
                if not self.diff(old[key], new[key]):
                    all_match = False
        return all_match

    def _diff_sequences(self, old: Any, new: Any) -> bool:
        if len(old) != len(new):
            if self.exhaustive:
                return self.fail(DivergenceKind.LIST_LENGTH_MISMATCH, len(old), len(new))
            # first-divergence mode points at the first index only one side has
            return self.fail_at(
                Index(min(len(old), len(new))),
                DivergenceKind.LIST_LENGTH_MISMATCH,
                len(old),
                len(new)
            )

        if self.options.strict_list_order:
            return self._diff_ordered(old, new)
        return self._matcher.match(old, new)

    def _diff_ordered(self, old: Any, new: Any) -> bool:
        all_match = True
        for i, (old_item, new_item) in enumerate(zip(old, new)):
            with self.descend(Index(i)):
                if not self.diff(old_item, new_item):
                    if not self.exhaustive:
                        return False
                    all_match = False
        return all_match


def compare_values(
    old: Any,
    new: Any,
    path: Union[Path, str] = ROOT,
    options: Optional[ComparisonOptions] = None
) -> Verdict:
    """
    Compare two value trees rooted at `path`.

    Args:
        old: The expected tree
        new: The actual tree
        path: Path of both trees inside a larger document
        options: Comparison options (defaults if not provided)

    Returns:
        Verdict with the first divergent path, or every divergence in
        exhaustive mode
    """
    options = options or ComparisonOptions()
    if isinstance(path, str):
        path = Path.parse(path)

    differ = Differ(options, path)
    equal = differ.run(old, new)

    if equal or options.exhaustive:
        return Verdict(equal=equal, divergences=differ.divergences)
    return Verdict(
        equal=False,
        path=differ.divergences[0].path,
        divergences=differ.divergences
    )

"""Order-insensitive comparison of two equal-length sequences."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

from .models import DivergenceKind
from .path import Index
from .values import ValueKind, kind_of, record_fields

if TYPE_CHECKING:
    from .differ import Differ

ID_KEY = "id"


class SequenceMatcher:
    """
    Pairs elements of two sequences regardless of position.

    Matching is greedy: each element of the first sequence takes the
    first still-unconsumed element of the second that suits it. This is
    not a global optimum and can report more divergences than strictly
    necessary.

    Consumption is tracked as a set of indices into the second sequence,
    so neither input is copied or mutated.
    """

    def __init__(self, differ: Differ):
        self.differ = differ

    def match(self, old: Sequence, new: Sequence) -> bool:
        if self.differ.exhaustive:
            return self._match_all(old, new)
        return self._match_first(old, new)

    def _match_first(self, old: Sequence, new: Sequence) -> bool:
        """
        Stop at the first element without an equal partner.

        The divergence is reported on the sequence itself; the failing
        element's index is not resolved.
        """
        consumed: set[int] = set()
        for i, item in enumerate(old):
            with self.differ.descend(Index(i)):
                j = self._find_equal(item, new, consumed)
            if j is None:
                return self.differ.fail(DivergenceKind.UNMATCHED_LIST_ITEM, item, None)
            consumed.add(j)
        return True

    def _match_all(self, old: Sequence, new: Sequence) -> bool:
        consumed: set[int] = set()
        pairs: list[tuple[Any, Any, bool]] = []
        unmatched: list[Any] = []

        for i, item in enumerate(old):
            exact = True
            with self.differ.descend(Index(i)):
                j = self._find_equal(item, new, consumed)
                if j is None:
                    exact = False
                    j = self._find_same_id(item, new, consumed)
            if j is None:
                unmatched.append(item)
                continue
            consumed.add(j)
            pairs.append((item, new[j], exact))

        all_match = not unmatched and len(consumed) == len(new)

        # id-paired elements may still disagree on other fields
        for position, (old_item, new_item, exact) in enumerate(pairs):
            if exact:
                continue
            with self.differ.descend(Index(position)):
                if not self.differ.diff(old_item, new_item):
                    all_match = False

        position = len(pairs)
        for item in unmatched:
            self.differ.fail_at(Index(position), DivergenceKind.UNMATCHED_LIST_ITEM, item, None)
            position += 1
        for j, item in enumerate(new):
            if j in consumed:
                continue
            self.differ.fail_at(Index(position), DivergenceKind.UNMATCHED_LIST_ITEM, None, item)
            position += 1

        return all_match

    def _find_equal(self, item: Any, pool: Sequence, consumed: set[int]) -> Optional[int]:
        for j, candidate in enumerate(pool):
            if j in consumed:
                continue
            if self.differ.equivalent(item, candidate):
                return j
        return None

    def _find_same_id(self, item: Any, pool: Sequence, consumed: set[int]) -> Optional[int]:
        fields = _id_fields(item)
        if fields is None:
            return None
        for j, candidate in enumerate(pool):
            if j in consumed:
                continue
            candidate_fields = _id_fields(candidate)
            if candidate_fields is None:
                continue
            if self.differ.equivalent(fields[ID_KEY], candidate_fields[ID_KEY]):
                return j
        return None


def _id_fields(value: Any) -> Optional[Mapping]:
    """Field mapping of a map-shaped value carrying an id, else None."""
    kind = kind_of(value)
    if kind is ValueKind.MAPPING:
        fields = value
    elif kind is ValueKind.RECORD:
        fields = record_fields(value)
    else:
        return None
    return fields if ID_KEY in fields else None

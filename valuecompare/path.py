"""Structured paths into value trees, and their rendering."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterator, NamedTuple, Union

from jsonpath_ng.jsonpath import Child, Fields, Index as JSONPathIndex, Root


class Key(NamedTuple):
    """A mapping-key segment."""
    name: Any

    def render(self, first: bool) -> str:
        return str(self.name) if first else f".{self.name}"


class Index(NamedTuple):
    """A sequence-index segment."""
    position: int

    def render(self, first: bool) -> str:
        return f"[{self.position}]"


Segment = Union[Key, Index]

_TOKEN = re.compile(r'\[(\d+)\]|\.?([^.\[\]]+)')


@dataclass(frozen=True)
class Path:
    """
    Location of a node inside a value tree.

    Rendered form: root is "", keys are dot-joined and indices are
    bracketed, e.g. "user.roles[1]" or "[0].name".
    """
    segments: tuple = ()

    @classmethod
    def parse(cls, text: str) -> Path:
        """
        Parse a rendered path back into segments.

        Keys that themselves contain '.', '[' or ']' cannot round-trip.
        """
        segments = []
        pos = 0
        while pos < len(text):
            match = _TOKEN.match(text, pos)
            if not match or match.end() == pos:
                raise ValueError(f"Invalid path {text!r} at offset {pos}")
            if match.group(1) is not None:
                segments.append(Index(int(match.group(1))))
            else:
                segments.append(Key(match.group(2)))
            pos = match.end()
        return cls(tuple(segments))

    def key(self, name: Any) -> Path:
        return Path(self.segments + (Key(name),))

    def index(self, position: int) -> Path:
        return Path(self.segments + (Index(position),))

    @property
    def is_root(self) -> bool:
        return not self.segments

    def render(self) -> str:
        return "".join(
            segment.render(i == 0) for i, segment in enumerate(self.segments)
        )

    def to_jsonpath(self):
        """
        Build the equivalent jsonpath_ng expression.

        Raises:
            ValueError: if a key segment is not a string; jsonpath field
                names are strings only
        """
        expr = Root()
        for segment in self.segments:
            if isinstance(segment, Index):
                expr = Child(expr, JSONPathIndex(segment.position))
            elif isinstance(segment.name, str):
                expr = Child(expr, Fields(segment.name))
            else:
                raise ValueError(
                    f"Cannot look up non-string key {segment.name!r} in path {self.render()!r}"
                )
        return expr

    def find(self, tree: Any) -> list[Any]:
        """
        Return the values this path addresses in a mapping/sequence tree.

        An empty list means nothing lives at this path. Only string keys
        are supported; see `to_jsonpath`.
        """
        return [match.value for match in self.to_jsonpath().find(tree)]

    def __str__(self) -> str:
        return self.render()

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)


ROOT = Path()

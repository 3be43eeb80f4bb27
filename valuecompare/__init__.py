"""
valuecompare - Structural comparison of nested value trees

Compares two trees of mappings, sequences, scalars, timestamps and tagged
records, and reports either the first place they diverge or a classified
list of every divergence.
"""

from .engine import ComparisonEngine, compare
from .differ import Differ, compare_values
from .matcher import SequenceMatcher
from .models import (
    ComparisonOptions,
    ComparisonResult,
    Divergence,
    DivergenceKind,
    Verdict,
    DEFAULT_ERROR_TEMPLATE,
)
from .path import Path, Key, Index, ROOT
from .values import TaggedRecord, ValueKind, kind_of
from .config import load_options, options_from_document
from .exceptions import (
    ValueCompareError,
    OptionsError,
    ConfigFileError,
    MaxDepthExceededError,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "ComparisonEngine",
    "compare",
    "Differ",
    "compare_values",
    "SequenceMatcher",
    # Options
    "ComparisonOptions",
    "DEFAULT_ERROR_TEMPLATE",
    "load_options",
    "options_from_document",
    # Results
    "ComparisonResult",
    "Divergence",
    "DivergenceKind",
    "Verdict",
    # Values and paths
    "TaggedRecord",
    "ValueKind",
    "kind_of",
    "Path",
    "Key",
    "Index",
    "ROOT",
    # Errors
    "ValueCompareError",
    "OptionsError",
    "ConfigFileError",
    "MaxDepthExceededError",
]

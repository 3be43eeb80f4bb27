"""Main comparison engine for valuecompare."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .differ import Differ
from .models import ComparisonOptions, ComparisonResult

logger = logging.getLogger(__name__)


class ComparisonEngine:
    """
    Compares two value trees and reports the outcome.

    First-divergence mode (the default) yields a single message built
    from the error template. Exhaustive mode yields every divergence.
    """

    def __init__(self, options: Optional[ComparisonOptions] = None):
        """
        Initialize the engine.

        Args:
            options: Comparison options (uses defaults if not provided)
        """
        self.options = options or ComparisonOptions()

    def compare(self, value1: Any, value2: Any) -> ComparisonResult:
        """
        Compare two value trees.

        Args:
            value1: The expected tree
            value2: The actual tree

        Returns:
            ComparisonResult; falsy when the trees diverge

        Raises:
            MaxDepthExceededError: if nesting exceeds options.max_depth
        """
        options = self.options
        mode = "exhaustive" if options.exhaustive else "first-divergence"
        logger.debug("Starting %s comparison", mode)

        differ = Differ(options)
        is_match = differ.run(value1, value2)

        if is_match:
            logger.debug("Values match (%d nodes checked)", differ.nodes_checked)
            return ComparisonResult(is_match=True)

        if options.exhaustive:
            logger.debug(
                "Found %d divergence(s) (%d nodes checked)",
                len(differ.divergences),
                differ.nodes_checked
            )
            return ComparisonResult(is_match=False, divergences=differ.divergences)

        path = differ.divergences[0].path
        logger.debug("First divergence at %r", path.render())
        return ComparisonResult(
            is_match=False,
            message=options.render_message(path),
            path=path
        )


def compare(
    value1: Any,
    value2: Any,
    options: Optional[ComparisonOptions] = None,
    **overrides: Any
) -> ComparisonResult:
    """
    Convenience function to compare two value trees.

    Keyword overrides are applied on top of `options`:

        compare(a, b, strict_list_order=True, exhaustive=True)

    Args:
        value1: The expected tree
        value2: The actual tree
        options: Optional comparison options
        **overrides: Individual option values

    Returns:
        ComparisonResult
    """
    options = options or ComparisonOptions()
    if overrides:
        options = options.replace(**overrides)
    return ComparisonEngine(options).compare(value1, value2)

"""Pattern matcher — evaluates profile rules over dimension results."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pcd.core.catalog.models import DimensionResult, PatternCondition, PatternInterpretation

logger = logging.getLogger(__name__)


def get_matching_patterns(
    results: Sequence[DimensionResult],
    patterns: Iterable[PatternInterpretation],
) -> list[PatternInterpretation]:
    """Return every pattern whose conditions all hold, in pattern order.

    Any number of patterns may match, including none.
    """
    matched = [p for p in patterns if pattern_matches(p, results)]
    logger.debug("Matched patterns: %s", [p.id for p in matched])
    return matched


def pattern_matches(pattern: PatternInterpretation, results: Sequence[DimensionResult]) -> bool:
    return all(condition_holds(c, results) for c in pattern.conditions)


def condition_holds(condition: PatternCondition, results: Sequence[DimensionResult]) -> bool:
    """Evaluate a single tagged condition.

    Dimensions are looked up by id. A condition naming a dimension that is
    absent from ``results`` is false.
    """
    if condition.kind == "dimension_status":
        result = _find(results, condition.dimension)
        return result is not None and result.status in condition.statuses

    if condition.kind == "status_count":
        count = sum(
            1
            for r in results
            if r.dimension.id not in condition.exclude and r.status in condition.statuses
        )
        return count >= (condition.at_least or 0)

    if condition.kind == "total_score":
        total = sum(r.score for r in results)
        if condition.at_least is not None and total < condition.at_least:
            return False
        if condition.at_most is not None and total > condition.at_most:
            return False
        return True

    logger.warning("Unknown condition kind %r; treating as not matched", condition.kind)
    return False


def _find(results: Sequence[DimensionResult], dimension_id: str | None) -> DimensionResult | None:
    for result in results:
        if result.dimension.id == dimension_id:
            return result
    return None

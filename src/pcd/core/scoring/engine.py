"""Deterministic scoring: raw answers -> per-dimension results and totals.

A question contributes to its dimension's score only when answered "yes".
Unanswered questions count the same as "no" and still count toward the
dimension's maximum, so an incomplete answer set can never inflate a score.

Classification bands, checked in this order:
    red    score <= threshold
    green  score == max_score
    amber  anything in between
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from pcd.core.catalog.models import Dimension, DimensionResult, Status
from pcd.core.catalog.registry import Catalog

logger = logging.getLogger(__name__)


class UnknownDimensionError(LookupError):
    """Raised when scoring a dimension that is not part of the catalog."""


def classify(score: int, max_score: int, threshold: int) -> Status:
    """Map a dimension score onto its status band."""
    if score <= threshold:
        return "red"
    if score == max_score:
        return "green"
    return "amber"


def _percentage(score: int, max_score: int) -> int:
    # round half up, in integers
    return (200 * score + max_score) // (2 * max_score)


def score_dimension(
    dimension: Dimension,
    answers: Mapping[int, bool],
    catalog: Catalog,
) -> DimensionResult:
    """Score one dimension against an answer set.

    Raises UnknownDimensionError if ``dimension`` is not the catalog's
    definition for its id.
    """
    if not catalog.contains(dimension):
        raise UnknownDimensionError(f"Dimension {dimension.id!r} is not in the catalog")

    score = sum(1 for q in dimension.questions if answers.get(q.id) is True)
    max_score = len(dimension.questions)

    return DimensionResult(
        dimension=dimension,
        score=score,
        max_score=max_score,
        status=classify(score, max_score, dimension.threshold),
        percentage=_percentage(score, max_score),
    )


def score_all(answers: Mapping[int, bool], catalog: Catalog) -> list[DimensionResult]:
    """Score every dimension, in catalog order."""
    results = [score_dimension(d, answers, catalog) for d in catalog.dimensions]
    logger.debug(
        "Scored %d dimensions: %s",
        len(results),
        {r.dimension.id: (r.score, r.status) for r in results},
    )
    return results


def get_total_score(results: Iterable[DimensionResult]) -> int:
    return sum(r.score for r in results)


def get_total_max(results: Iterable[DimensionResult]) -> int:
    return sum(r.max_score for r in results)


def unanswered_question_ids(answers: Mapping[int, bool], catalog: Catalog) -> list[int]:
    """Question ids with no answer yet, ascending."""
    return [qid for qid in catalog.question_ids if qid not in answers]

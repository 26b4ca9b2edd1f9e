"""Catalog validator — ensures the diagnostic definitions are well-formed."""

from __future__ import annotations

import logging
from pathlib import Path

from pcd.core.catalog.loader import CatalogError, load_catalog_directory
from pcd.core.catalog.models import STATUSES, PatternCondition
from pcd.core.catalog.registry import Catalog

logger = logging.getLogger(__name__)


def validate_catalog(catalog: Catalog) -> list[str]:
    """Check the structural invariants of a loaded catalog.

    Returns a list of human-readable errors (empty when valid).
    """
    errors: list[str] = []

    if not catalog.dimensions:
        errors.append("Catalog defines no dimensions")

    for dimension in catalog.dimensions:
        size = len(dimension.questions)
        if size == 0:
            errors.append(f"Dimension '{dimension.id}' has no questions")
            continue
        # A dimension answered "yes" throughout must not read as failing.
        if not 0 <= dimension.threshold < size:
            errors.append(
                f"Dimension '{dimension.id}' threshold {dimension.threshold} "
                f"must be between 0 and {size - 1}"
            )
        if not dimension.name:
            errors.append(f"Dimension '{dimension.id}' has an empty name")

    ids = catalog.question_ids
    expected = list(range(1, len(ids) + 1))
    if ids != expected:
        missing = sorted(set(expected) - set(ids))
        extra = sorted(set(ids) - set(expected))
        errors.append(
            f"Question ids must run 1..{len(ids)} without gaps "
            f"(missing: {missing}, unexpected: {extra})"
        )

    for pattern in catalog.patterns:
        if not pattern.label:
            errors.append(f"Pattern '{pattern.id}' has an empty label")
        if not pattern.conditions:
            errors.append(f"Pattern '{pattern.id}' has no conditions")
        for condition in pattern.conditions:
            errors.extend(
                f"Pattern '{pattern.id}': {problem}"
                for problem in _condition_problems(condition, catalog)
            )

    return errors


def _condition_problems(condition: PatternCondition, catalog: Catalog) -> list[str]:
    problems: list[str] = []

    unknown_statuses = [s for s in condition.statuses if s not in STATUSES]
    if unknown_statuses:
        problems.append(f"unknown statuses {unknown_statuses}")

    if condition.kind == "dimension_status":
        if not condition.dimension:
            problems.append("dimension_status condition needs a 'dimension'")
        elif catalog.get_dimension(condition.dimension) is None:
            problems.append(f"unknown dimension '{condition.dimension}'")
        if not condition.statuses:
            problems.append("dimension_status condition needs 'statuses'")

    elif condition.kind == "status_count":
        if condition.at_least is None:
            problems.append("status_count condition needs 'at_least'")
        if not condition.statuses:
            problems.append("status_count condition needs 'statuses'")
        for dimension_id in condition.exclude:
            if catalog.get_dimension(dimension_id) is None:
                problems.append(f"unknown excluded dimension '{dimension_id}'")

    elif condition.kind == "total_score":
        if condition.at_least is None and condition.at_most is None:
            problems.append("total_score condition needs 'at_least' or 'at_most'")

    return problems


def validate_catalog_directory(directory: str | Path) -> tuple[int, list[str]]:
    """Load and validate a catalog directory.

    Returns: (dimension_count, errors)
    """
    try:
        catalog = load_catalog_directory(directory)
    except CatalogError as exc:
        return 0, [f"Failed to load — {exc}"]

    errors = validate_catalog(catalog)
    for err in errors:
        logger.error("%s", err)
    return len(catalog.dimensions), errors

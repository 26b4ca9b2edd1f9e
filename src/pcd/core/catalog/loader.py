"""Catalog loader — reads the diagnostic YAML definitions from disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from pcd.core.catalog.models import (
    CONDITION_KINDS,
    Dimension,
    PatternCondition,
    PatternInterpretation,
    Question,
)
from pcd.core.catalog.registry import Catalog

logger = logging.getLogger(__name__)

DIMENSIONS_FILE = "dimensions.yaml"
PATTERNS_FILE = "patterns.yaml"
COPY_FILE = "copy.yaml"


class CatalogError(ValueError):
    """Raised when a catalog file is missing or malformed."""


def load_catalog_directory(directory: str | Path) -> Catalog:
    """Load dimensions, patterns and copy text from a directory.

    ``dimensions.yaml`` is required; ``patterns.yaml`` and ``copy.yaml`` are
    optional and default to empty.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise CatalogError(f"Catalog directory does not exist: {directory}")

    dimensions_path = directory / DIMENSIONS_FILE
    if not dimensions_path.is_file():
        raise CatalogError(f"Missing {DIMENSIONS_FILE} in {directory}")

    catalog = Catalog()
    for dimension in load_dimensions_file(dimensions_path):
        _register(catalog.register_dimension, dimension, dimensions_path)

    patterns_path = directory / PATTERNS_FILE
    if patterns_path.is_file():
        for pattern in load_patterns_file(patterns_path):
            _register(catalog.register_pattern, pattern, patterns_path)

    copy_path = directory / COPY_FILE
    if copy_path.is_file():
        catalog.copy = _read_yaml(copy_path)

    logger.info(
        "Loaded catalog from %s: %d dimensions, %d questions, %d patterns",
        directory,
        len(catalog.dimensions),
        catalog.total_questions,
        len(catalog.patterns),
    )
    return catalog


def load_dimensions_file(path: Path) -> list[Dimension]:
    """Parse a YAML file into Dimension instances, in file order."""
    data = _read_yaml(path)
    entries = data.get("dimensions")
    if not isinstance(entries, list):
        raise CatalogError(f"{path}: expected a 'dimensions' list")

    dimensions: list[Dimension] = []
    for entry in entries:
        try:
            dimensions.append(_build_dimension(entry))
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise CatalogError(f"{path}: invalid dimension entry — {exc!r}") from exc
    return dimensions


def load_patterns_file(path: Path) -> list[PatternInterpretation]:
    """Parse a YAML file into PatternInterpretation instances, in file order."""
    data = _read_yaml(path)
    entries = data.get("patterns", [])
    if not isinstance(entries, list):
        raise CatalogError(f"{path}: expected a 'patterns' list")

    patterns: list[PatternInterpretation] = []
    for entry in entries:
        try:
            patterns.append(_build_pattern(entry))
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise CatalogError(f"{path}: invalid pattern entry — {exc!r}") from exc
    return patterns


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise CatalogError(f"{path}: invalid YAML — {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise CatalogError(f"{path}: top level must be a mapping")
    return data


def _register(register, item, path: Path) -> None:
    try:
        register(item)
    except ValueError as exc:
        raise CatalogError(f"{path}: {exc}") from exc


def _build_dimension(data: dict[str, Any]) -> Dimension:
    return Dimension(
        id=str(data["id"]),
        name=data["name"],
        subtitle=(data.get("subtitle") or "").strip(),
        questions=tuple(
            Question(id=int(q["id"]), text=q["text"].strip())
            for q in data["questions"]
        ),
        threshold=int(data["threshold"]),
        reflection=(data.get("reflection") or "").strip(),
        reflection_prompt=(data.get("reflection_prompt") or "").strip(),
    )


def _build_pattern(data: dict[str, Any]) -> PatternInterpretation:
    return PatternInterpretation(
        id=str(data["id"]),
        label=data["label"],
        description=(data.get("description") or "").strip(),
        conditions=tuple(_build_condition(c) for c in data.get("conditions") or ()),
    )


def _build_condition(data: dict[str, Any]) -> PatternCondition:
    kind = data["kind"]
    if kind not in CONDITION_KINDS:
        raise ValueError(f"unknown condition kind {kind!r}")
    return PatternCondition(
        kind=kind,
        dimension=data.get("dimension"),
        statuses=tuple(data.get("statuses", [])),
        exclude=tuple(data.get("exclude", [])),
        at_least=data.get("at_least"),
        at_most=data.get("at_most"),
    )

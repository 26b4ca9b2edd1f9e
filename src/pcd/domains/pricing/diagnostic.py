"""Pricing Coherence Diagnostic — scoring, patterns and share tokens over the bundled catalog.

This is the entry point for callers that render the questionnaire:

    results = score_all(answers)
    total = get_total_score(results), get_total_max(results)
    patterns = get_matching_patterns(results)
    token = encode_answers(answers)        # ...?r=<token>
    answers = decode_answers(token)        # may raise MalformedTokenError
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from functools import lru_cache
from pathlib import Path

from pcd.core.catalog.loader import load_catalog_directory
from pcd.core.catalog.models import Answers, Dimension, DimensionResult, PatternInterpretation
from pcd.core.catalog.registry import Catalog
from pcd.core.catalog.validator import validate_catalog
from pcd.core.config.settings import get_settings
from pcd.core.scoring import engine, matcher
from pcd.core.share import codec

logger = logging.getLogger(__name__)

# Catalog YAML definitions live under src/pcd/domains/pricing/catalog/
CATALOG_DIR = Path(__file__).resolve().parent / "catalog"


def catalog_directory() -> Path:
    """Directory the catalog is read from; ``PCD_CATALOG_DIR`` overrides the bundled one."""
    settings = get_settings()
    return Path(settings.pcd_catalog_dir).expanduser() if settings.pcd_catalog_dir else CATALOG_DIR


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    """Load the catalog once per process, logging any validation problems."""
    directory = catalog_directory()
    catalog = load_catalog_directory(directory)
    for error in validate_catalog(catalog):
        logger.warning("Catalog %s: %s", directory, error)
    return catalog


def score_dimension(dimension: Dimension, answers: Mapping[int, bool]) -> DimensionResult:
    return engine.score_dimension(dimension, answers, get_catalog())


def score_all(answers: Mapping[int, bool]) -> list[DimensionResult]:
    return engine.score_all(answers, get_catalog())


def get_total_score(results: Iterable[DimensionResult]) -> int:
    return engine.get_total_score(results)


def get_total_max(results: Iterable[DimensionResult]) -> int:
    return engine.get_total_max(results)


def get_matching_patterns(results: Sequence[DimensionResult]) -> list[PatternInterpretation]:
    return matcher.get_matching_patterns(results, get_catalog().patterns)


def encode_answers(answers: Mapping[int, bool]) -> str:
    return codec.encode_answers(answers, get_catalog().question_ids)


def decode_answers(token: str) -> Answers:
    return codec.decode_answers(token, get_catalog().question_ids)


def unanswered_question_ids(answers: Mapping[int, bool]) -> list[int]:
    return engine.unanswered_question_ids(answers, get_catalog())


def is_complete(answers: Mapping[int, bool]) -> bool:
    """True once every catalog question has an answer; sharing should wait for this."""
    return not unanswered_question_ids(answers)

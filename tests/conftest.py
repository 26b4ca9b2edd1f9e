"""Shared test fixtures for Pricing Coherence Diagnostic tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from pcd.core.catalog.models import (  # noqa: E402
    Dimension,
    DimensionResult,
    PatternCondition,
    PatternInterpretation,
    Question,
)
from pcd.core.catalog.registry import Catalog  # noqa: E402
from pcd.domains.pricing import diagnostic  # noqa: E402

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("PCD_CATALOG_DIR", raising=False)
    monkeypatch.setenv("SHARE_BASE_URL", "https://example.test")
    monkeypatch.setenv("SHARE_BASE_PATH", "")
    monkeypatch.setenv("SHARE_PAGE_PATH", "/diagnostic-demo")
    monkeypatch.setenv("SHARE_QUERY_PARAM", "r")
    diagnostic.get_catalog.cache_clear()
    yield
    diagnostic.get_catalog.cache_clear()


# ---------------------------------------------------------------------------
# Bundled catalog
# ---------------------------------------------------------------------------

@pytest.fixture
def catalog() -> Catalog:
    """The bundled pricing catalog."""
    return diagnostic.get_catalog()


def _answers_with_scores(catalog: Catalog, scores: dict[str, int]) -> dict[int, bool]:
    """Build a complete answer set giving each dimension the requested score.

    Dimensions not named in ``scores`` get full marks. The first ``n``
    questions of a dimension are answered "yes", the rest "no".
    """
    answers: dict[int, bool] = {}
    for dimension in catalog.dimensions:
        wanted = scores.get(dimension.id, len(dimension.questions))
        for index, question in enumerate(dimension.questions):
            answers[question.id] = index < wanted
    return answers


@pytest.fixture
def answers_with_scores(catalog: Catalog):
    """Factory: ``answers_with_scores({"wtp-evidence": 2})``."""
    return lambda scores: _answers_with_scores(catalog, scores)


@pytest.fixture
def all_yes(catalog: Catalog) -> dict[int, bool]:
    return {qid: True for qid in catalog.question_ids}


@pytest.fixture
def all_no(catalog: Catalog) -> dict[int, bool]:
    return {qid: False for qid in catalog.question_ids}


# ---------------------------------------------------------------------------
# Hand-built models
# ---------------------------------------------------------------------------

def _make_test_dimension(
    id: str = "test_dimension",
    question_ids: list[int] | None = None,
    threshold: int = 1,
) -> Dimension:
    """Create a test dimension with sensible defaults."""
    ids = question_ids or [1, 2, 3]
    return Dimension(
        id=id,
        name=f"Test: {id}",
        subtitle=f"Test dimension {id}",
        questions=tuple(Question(id=qid, text=f"Question {qid}?") for qid in ids),
        threshold=threshold,
        reflection="Test reflection.",
        reflection_prompt="Test prompt?",
    )


def _make_result(dimension_id: str, status: str, score: int = 0, max_score: int = 4) -> DimensionResult:
    dimension = _make_test_dimension(id=dimension_id, question_ids=list(range(1, max_score + 1)))
    return DimensionResult(
        dimension=dimension,
        score=score,
        max_score=max_score,
        status=status,  # type: ignore[arg-type]
        percentage=(200 * score + max_score) // (2 * max_score),
    )


@pytest.fixture
def make_dimension():
    """Factory for standalone test dimensions."""
    return _make_test_dimension


@pytest.fixture
def make_results():
    """Factory: results with forced statuses, for pattern tests.

    ``make_results({"wtp-evidence": "red"}, scores={"wtp-evidence": 1})``
    """

    def _make(statuses: dict[str, str], scores: dict[str, int] | None = None) -> list[DimensionResult]:
        scores = scores or {}
        return [
            _make_result(dim_id, status, score=scores.get(dim_id, 0))
            for dim_id, status in statuses.items()
        ]

    return _make


@pytest.fixture
def small_catalog() -> Catalog:
    """A two-dimension catalog with one pattern of each condition kind."""
    cat = Catalog()
    cat.register_dimension(_make_test_dimension(id="alpha", question_ids=[1, 2, 3], threshold=1))
    cat.register_dimension(_make_test_dimension(id="beta", question_ids=[4, 5], threshold=0))
    cat.register_pattern(PatternInterpretation(
        id="alpha-red",
        label="Alpha at risk",
        description="Alpha is red.",
        conditions=(PatternCondition(kind="dimension_status", dimension="alpha", statuses=("red",)),),
    ))
    cat.register_pattern(PatternInterpretation(
        id="two-green",
        label="Two green",
        description="Two dimensions green.",
        conditions=(PatternCondition(kind="status_count", statuses=("green",), at_least=2),),
    ))
    cat.register_pattern(PatternInterpretation(
        id="low-total",
        label="Low total",
        description="Total at most 1.",
        conditions=(PatternCondition(kind="total_score", at_most=1),),
    ))
    return cat

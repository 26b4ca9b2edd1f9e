"""Catalog registry — in-memory index for the loaded diagnostic definitions."""

from __future__ import annotations

import logging

from pcd.core.catalog.models import Dimension, PatternInterpretation, Question

logger = logging.getLogger(__name__)


class Catalog:
    """In-memory registry of dimensions, questions, pattern rules and copy text.

    Registration order is preserved and is the display order of results and
    the evaluation order of patterns.
    """

    def __init__(self) -> None:
        self._dimensions: dict[str, Dimension] = {}
        self._questions: dict[int, Question] = {}
        self._question_dimension: dict[int, str] = {}
        self._patterns: dict[str, PatternInterpretation] = {}
        self.copy: dict[str, object] = {}

    def register_dimension(self, dimension: Dimension) -> None:
        """Add a dimension and index its questions."""
        if dimension.id in self._dimensions:
            raise ValueError(f"Duplicate dimension id registered: {dimension.id!r}")
        for question in dimension.questions:
            if question.id in self._questions:
                raise ValueError(
                    f"Question {question.id} of dimension {dimension.id!r} is already "
                    f"registered under {self._question_dimension[question.id]!r}"
                )
        self._dimensions[dimension.id] = dimension
        for question in dimension.questions:
            self._questions[question.id] = question
            self._question_dimension[question.id] = dimension.id

    def register_pattern(self, pattern: PatternInterpretation) -> None:
        """Append a pattern rule to the evaluation order."""
        if pattern.id in self._patterns:
            raise ValueError(f"Duplicate pattern id registered: {pattern.id!r}")
        self._patterns[pattern.id] = pattern

    def get_dimension(self, dimension_id: str) -> Dimension | None:
        """Look up a dimension by ID."""
        return self._dimensions.get(dimension_id)

    def get_question(self, question_id: int) -> Question | None:
        return self._questions.get(question_id)

    def get_pattern(self, pattern_id: str) -> PatternInterpretation | None:
        return self._patterns.get(pattern_id)

    def dimension_for_question(self, question_id: int) -> Dimension | None:
        """Find the dimension a question belongs to."""
        dimension_id = self._question_dimension.get(question_id)
        return self._dimensions.get(dimension_id) if dimension_id else None

    def contains(self, dimension: Dimension) -> bool:
        """True when ``dimension`` is the registered definition for its id."""
        return self._dimensions.get(dimension.id) == dimension

    @property
    def dimensions(self) -> list[Dimension]:
        return list(self._dimensions.values())

    @property
    def patterns(self) -> list[PatternInterpretation]:
        return list(self._patterns.values())

    @property
    def question_ids(self) -> list[int]:
        """All question ids in ascending order (the canonical codec order)."""
        return sorted(self._questions)

    @property
    def total_questions(self) -> int:
        return len(self._questions)

"""Data models for the diagnostic catalog and its derived results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Status = Literal["green", "amber", "red"]

STATUSES: tuple[str, ...] = ("green", "amber", "red")

ConditionKind = Literal["dimension_status", "status_count", "total_score"]

CONDITION_KINDS: tuple[str, ...] = ("dimension_status", "status_count", "total_score")

# question id -> answered "yes"; unanswered ids are absent
Answers = dict[int, bool]


@dataclass(frozen=True)
class Question:
    """A single yes/no question."""

    id: int
    text: str


@dataclass(frozen=True)
class Dimension:
    """A named group of questions sharing one scoring threshold."""

    id: str
    name: str
    subtitle: str
    questions: tuple[Question, ...]
    threshold: int  # score at or below this shows the reflection
    reflection: str = ""
    reflection_prompt: str = ""

    @property
    def question_ids(self) -> tuple[int, ...]:
        return tuple(q.id for q in self.questions)


@dataclass(frozen=True)
class PatternCondition:
    """One clause of a pattern rule, tagged by ``kind``.

    * ``dimension_status`` -- ``dimension`` has one of ``statuses``.
    * ``status_count``     -- at least ``at_least`` results, ignoring the ids in
      ``exclude``, have one of ``statuses``.
    * ``total_score``      -- the summed score is within ``at_least``/``at_most``.
    """

    kind: ConditionKind
    dimension: str | None = None
    statuses: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    at_least: int | None = None
    at_most: int | None = None


@dataclass(frozen=True)
class PatternInterpretation:
    """A narrative profile label that fires when all its conditions hold."""

    id: str
    label: str
    description: str
    conditions: tuple[PatternCondition, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DimensionResult:
    """Score and classification of one dimension for one answer set."""

    dimension: Dimension
    score: int
    max_score: int
    status: Status
    percentage: int

    @property
    def shows_reflection(self) -> bool:
        return self.status == "red"

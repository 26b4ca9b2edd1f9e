"""Plain-text result summary for a completed diagnostic."""

from __future__ import annotations

from collections.abc import Sequence

from pcd.core.catalog.models import DimensionResult, PatternInterpretation
from pcd.core.catalog.registry import Catalog
from pcd.core.scoring.engine import get_total_max, get_total_score

STATUS_LABELS = {"green": "Strong", "amber": "Partial", "red": "At Risk"}

# "gaps in two or more dimensions" warrants the workshop callout
WORKSHOP_MIN_GAPS = 2


def dimensions_at_risk(results: Sequence[DimensionResult]) -> list[DimensionResult]:
    return [r for r in results if r.status == "red"]


def recommends_workshop(results: Sequence[DimensionResult]) -> bool:
    return len(dimensions_at_risk(results)) >= WORKSHOP_MIN_GAPS


def render_summary(
    results: Sequence[DimensionResult],
    patterns: Sequence[PatternInterpretation],
    catalog: Catalog,
    share_url: str | None = None,
) -> str:
    """Render results, matched patterns and follow-up copy as plain text."""
    parts: list[str] = []

    parts.append(f"Score: {get_total_score(results)}/{get_total_max(results)}")

    lines = [
        f"{r.dimension.name}: {r.score}/{r.max_score} ({STATUS_LABELS[r.status]})"
        for r in results
    ]
    parts.append("\n".join(lines))

    at_risk = dimensions_at_risk(results)
    if at_risk:
        prompts = "\n".join(
            f"- {r.dimension.name}: {r.dimension.reflection_prompt}"
            for r in at_risk
            if r.dimension.reflection_prompt
        )
        if prompts:
            parts.append(f"Questions to reflect on:\n{prompts}")

    if patterns:
        pattern_lines = "\n".join(f"{p.label} - {p.description}" for p in patterns)
        parts.append(f"Profile Pattern:\n{pattern_lines}")

    cta = catalog.copy.get("call_to_action", {})
    if recommends_workshop(results) and isinstance(cta, dict) and cta.get("callout"):
        parts.append(str(cta["callout"]).strip())

    if share_url:
        parts.append(f"View full results: {share_url}")

    attribution = catalog.copy.get("attribution")
    if attribution:
        parts.append(f"---\n{str(attribution).strip()}")

    return "\n\n".join(parts)

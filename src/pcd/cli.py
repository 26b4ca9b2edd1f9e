"""CLI for the Pricing Coherence Diagnostic.

Scores answer sets, builds and reads share tokens, and validates catalog
definitions.
"""

from __future__ import annotations

import json
import logging
import sys

import click

from pcd.core.catalog.validator import validate_catalog_directory
from pcd.core.config.settings import get_settings
from pcd.core.share.codec import MalformedTokenError
from pcd.core.share.links import ShareLinkError, build_share_url, token_from_share_url
from pcd.domains.pricing import diagnostic
from pcd.domains.pricing.summary import STATUS_LABELS, render_summary

logger = logging.getLogger(__name__)

INVALID_LINK_MESSAGE = "This link is invalid. Take the diagnostic again to get a new one."


@click.group()
@click.version_option(version="0.1.0", prog_name="pcd")
def main():
    """Pricing Coherence Diagnostic.

    Scores 18 yes/no answers across 5 pricing dimensions, reports matching
    profile patterns, and encodes answers into shareable links.
    """
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.pcd_log_level.upper(), logging.INFO))


def _answers_from_yes(yes: tuple[int, ...]) -> dict[int, bool]:
    catalog = diagnostic.get_catalog()
    unknown = sorted(set(yes) - set(catalog.question_ids))
    if unknown:
        raise click.BadParameter(
            f"Unknown question ids: {unknown} (valid: 1-{catalog.total_questions})",
            param_hint="--yes",
        )
    return {qid: qid in yes for qid in catalog.question_ids}


def _decode_or_exit(value: str) -> dict[int, bool]:
    """Decode a token or full share URL, exiting with status 2 when invalid."""
    settings = get_settings()
    try:
        token = token_from_share_url(value, settings) if "://" in value else value
        return diagnostic.decode_answers(token)
    except (MalformedTokenError, ShareLinkError) as exc:
        logger.info("Invalid share input: %s", exc)
        click.echo(INVALID_LINK_MESSAGE, err=True)
        sys.exit(2)


@main.command("score")
@click.option(
    "--yes", "-y",
    multiple=True,
    type=int,
    help="Question id answered 'yes' (repeatable); all others count as 'no'",
)
@click.option(
    "--token", "-t",
    help="Share token (or full share URL) to score instead of --yes",
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text",
)
def score_cmd(yes: tuple[int, ...], token: str | None, json_output: bool):
    """Score an answer set and print the results.

    Examples:
        pcd score -y 1 -y 2 -y 5
        pcd score -t gAAA
    """
    if token is not None and yes:
        raise click.UsageError("Use either --yes or --token, not both")

    answers = _decode_or_exit(token) if token is not None else _answers_from_yes(yes)
    catalog = diagnostic.get_catalog()
    results = diagnostic.score_all(answers)
    patterns = diagnostic.get_matching_patterns(results)
    share_url = build_share_url(answers, catalog.question_ids, get_settings())

    if json_output:
        payload = {
            "total_score": diagnostic.get_total_score(results),
            "total_max": diagnostic.get_total_max(results),
            "dimensions": [
                {
                    "id": r.dimension.id,
                    "name": r.dimension.name,
                    "score": r.score,
                    "max_score": r.max_score,
                    "percentage": r.percentage,
                    "status": r.status,
                    "label": STATUS_LABELS[r.status],
                }
                for r in results
            ],
            "patterns": [{"id": p.id, "label": p.label} for p in patterns],
            "token": diagnostic.encode_answers(answers),
            "share_url": share_url,
        }
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(render_summary(results, patterns, catalog, share_url=share_url))


@main.command("encode")
@click.option(
    "--yes", "-y",
    multiple=True,
    type=int,
    help="Question id answered 'yes' (repeatable); all others count as 'no'",
)
def encode_cmd(yes: tuple[int, ...]):
    """Print the share token and link for an answer set."""
    answers = _answers_from_yes(yes)
    click.echo(diagnostic.encode_answers(answers))
    click.echo(build_share_url(answers, diagnostic.get_catalog().question_ids, get_settings()))


@main.command("decode")
@click.argument("token")
def decode_cmd(token: str):
    """Print the answers held in a share token or share URL."""
    answers = _decode_or_exit(token)
    for qid, value in answers.items():
        click.echo(f"Q{qid}: {'yes' if value else 'no'}")


@main.command("validate")
@click.option(
    "--catalog-dir", "-c",
    type=click.Path(exists=True, file_okay=False),
    help="Catalog directory (default: PCD_CATALOG_DIR, else the bundled catalog)",
)
def validate_cmd(catalog_dir: str | None):
    """Validate catalog definitions."""
    directory = catalog_dir or str(diagnostic.catalog_directory())
    count, errors = validate_catalog_directory(directory)
    if errors:
        for err in errors:
            click.echo(f"ERROR: {err}", err=True)
        sys.exit(1)
    click.echo(f"Catalog OK: {count} dimensions in {directory}")


if __name__ == "__main__":
    main()

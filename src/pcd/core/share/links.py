"""Share links — embed an answer token in a results page URL and read it back."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from urllib.parse import parse_qs, urlencode, urlsplit

from pcd.core.config.settings import Settings
from pcd.core.share.codec import encode_answers


class ShareLinkError(ValueError):
    """Raised when a URL does not carry a share token."""


def share_page_url(settings: Settings) -> str:
    """Absolute URL of the results page, without a token."""
    base = settings.share_base_url.rstrip("/")
    base_path = settings.share_base_path.strip("/")
    page_path = settings.share_page_path.strip("/")
    parts = [p for p in (base_path, page_path) if p]
    return "/".join([base, *parts])


def build_share_url(
    answers: Mapping[int, bool],
    question_ids: Sequence[int],
    settings: Settings,
) -> str:
    """Build ``{origin}{base path}{page}?{param}={token}`` for an answer set."""
    token = encode_answers(answers, question_ids)
    query = urlencode({settings.share_query_param: token})
    return f"{share_page_url(settings)}?{query}"


def token_from_share_url(url: str, settings: Settings) -> str:
    """Extract the answer token from a share URL.

    The token itself is not validated here; pass it to ``decode_answers``.
    Raises ShareLinkError when the URL has no token parameter.
    """
    params = parse_qs(urlsplit(url).query, keep_blank_values=True)
    values = params.get(settings.share_query_param)
    if not values:
        raise ShareLinkError(
            f"URL has no '{settings.share_query_param}' parameter: {url[:80]}"
        )
    return values[0]

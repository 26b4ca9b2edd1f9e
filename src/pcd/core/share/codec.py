"""Compact, URL-safe encoding of a complete answer set.

Each canonical question id (ascending) becomes one bit, most significant bit
first: 1 for "yes", 0 for "no" or unanswered. The bits are packed into the
fewest whole bytes, trailing padding bits set to 0, and rendered as base64url
without ``=`` padding. Eighteen questions give three bytes and a
four-character token that can sit in a query string unescaped.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from collections.abc import Mapping, Sequence

from pcd.core.catalog.models import Answers

logger = logging.getLogger(__name__)

_TOKEN_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


class MalformedTokenError(ValueError):
    """Raised when a share token fails structural validation."""


def token_length(question_count: int) -> int:
    """Number of characters in a token for ``question_count`` questions."""
    byte_count = _byte_count(question_count)
    return -(-byte_count * 4 // 3)


def encode_answers(answers: Mapping[int, bool], question_ids: Sequence[int]) -> str:
    """Encode ``answers`` over the canonical ``question_ids`` into a token.

    The result depends only on the answer values, never on mapping order.
    """
    ids = sorted(question_ids)
    bits = 0
    for qid in ids:
        bits = (bits << 1) | (1 if answers.get(qid) is True else 0)

    byte_count = _byte_count(len(ids))
    bits <<= byte_count * 8 - len(ids)
    raw = bits.to_bytes(byte_count, "big")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_answers(token: str, question_ids: Sequence[int]) -> Answers:
    """Decode a token into a full answer map over ``question_ids``.

    Raises MalformedTokenError on a wrong length, a character outside the
    base64url alphabet, or non-zero padding bits. Never returns a partial map.
    """
    if not isinstance(token, str):
        raise MalformedTokenError(f"Token must be a string, got {type(token).__name__}")

    ids = sorted(question_ids)
    expected = token_length(len(ids))
    if len(token) != expected:
        logger.warning("Rejected share token: length %d, expected %d", len(token), expected)
        raise MalformedTokenError(
            f"Token must be {expected} characters long, got {len(token)}"
        )
    if not _TOKEN_ALPHABET.fullmatch(token):
        logger.warning("Rejected share token: characters outside base64url alphabet")
        raise MalformedTokenError("Token contains characters outside the URL-safe alphabet")

    padded = token + "=" * (-len(token) % 4)
    try:
        raw = base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedTokenError(f"Token is not valid base64url: {exc}") from exc

    byte_count = _byte_count(len(ids))
    if len(raw) != byte_count:
        raise MalformedTokenError(f"Token decodes to {len(raw)} bytes, expected {byte_count}")
    # unused low bits of the last character must be zero too
    if base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=") != token:
        raise MalformedTokenError("Token is not in canonical form")

    bits = int.from_bytes(raw, "big")
    padding = byte_count * 8 - len(ids)
    if bits & ((1 << padding) - 1):
        logger.warning("Rejected share token: non-zero padding bits")
        raise MalformedTokenError("Token has non-zero padding bits")
    bits >>= padding

    answers: Answers = {}
    for position, qid in enumerate(ids):
        shift = len(ids) - 1 - position
        answers[qid] = bool((bits >> shift) & 1)
    return answers


def _byte_count(question_count: int) -> int:
    return max(1, -(-question_count // 8))

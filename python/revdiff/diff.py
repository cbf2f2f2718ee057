"""
Entry point tying tokenizer, aligner and presenter together.
"""

from typing import Optional

import structlog

from revdiff.aligner import align
from revdiff.models import DiffResult
from revdiff.presenter import present, summarize
from revdiff.tokenizer import tokenize

logger = structlog.get_logger(__name__)


def diff(original: str, revised: str) -> DiffResult:
    """
    Aligns the revised text against the original and returns both views
    as classified, stably-keyed segments.

    Pure: the result depends only on the two strings.
    """
    ops = align(tokenize(original), tokenize(revised))
    original_segments, revised_segments = present(ops)
    stats = summarize(ops)

    logger.debug(
        "Computed diff",
        substituted=stats.substituted,
        inserted=stats.inserted,
        deleted=stats.deleted,
    )
    return DiffResult(original_segments=original_segments, revised_segments=revised_segments, stats=stats)


def diff_texts(original: Optional[str], revised: Optional[str]) -> DiffResult:
    """Same as diff(), treating a missing text as empty."""
    return diff(original or "", revised or "")

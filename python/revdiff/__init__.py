from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from revdiff.aligner import AlignmentOp, Delete, Insert, Match, Substitute, align
from revdiff.diff import diff, diff_texts
from revdiff.markup import render_critic_markup
from revdiff.models import DiffResult, DiffStats, Segment, SegmentRole
from revdiff.presenter import present
from revdiff.tokenizer import Token, TokenKind, tokenize

try:
    __version__ = version("revdiff")
except PackageNotFoundError:
    # Source checkout that was never pip-installed; fall back to the VERSION file
    _version_file = Path(__file__).parent / "VERSION"
    if _version_file.is_file():
        __version__ = _version_file.read_text().strip()
    else:
        __version__ = "0.0.0-dev"

__all__ = [
    "tokenize",
    "align",
    "present",
    "diff",
    "diff_texts",
    "render_critic_markup",
    "Token",
    "TokenKind",
    "AlignmentOp",
    "Match",
    "Substitute",
    "Delete",
    "Insert",
    "Segment",
    "SegmentRole",
    "DiffStats",
    "DiffResult",
    "__version__",
]

"""
Minimum-edit alignment of two token sequences.

Small inputs go through an edit-distance grid so the cheapest alignment is
found exactly, with ties broken towards the earliest possible Match.
Inputs whose grid would exceed MAX_GRID_CELLS are diffed with Myers'
linear-space algorithm (diff_match_patch) over token-encoded strings. That
path trades exactness for a bound: dmp takes half-match shortcuts and stops
refining after DIFF_TIMEOUT seconds, so the result still reconstructs both
texts but may not be minimal, and may differ between runs that hit the
deadline.
"""

import sys
from dataclasses import dataclass
from typing import ClassVar, Dict, List, Optional, Sequence, Tuple

import structlog
from diff_match_patch import diff_match_patch

from revdiff import config
from revdiff.tokenizer import Token

logger = structlog.get_logger(__name__)

# One code point per distinct token text on the Myers path
MAX_DISTINCT_TOKENS = sys.maxunicode + 1


class AlignmentOp:
    """One step relating a position in the original sequence to one in the revised sequence."""

    variant: ClassVar[str]


@dataclass(frozen=True)
class Match(AlignmentOp):
    original: Token
    revised: Token
    variant: ClassVar[str] = "match"


@dataclass(frozen=True)
class Substitute(AlignmentOp):
    original: Token
    revised: Token
    variant: ClassVar[str] = "substitute"


@dataclass(frozen=True)
class Delete(AlignmentOp):
    original: Token
    variant: ClassVar[str] = "delete"

    @property
    def revised(self) -> Optional[Token]:
        return None


@dataclass(frozen=True)
class Insert(AlignmentOp):
    revised: Token
    variant: ClassVar[str] = "insert"

    @property
    def original(self) -> Optional[Token]:
        return None


def original_side(ops: Sequence[AlignmentOp]) -> Tuple[Token, ...]:
    """Tokens of the original text, in op order (Match, Substitute, Delete)."""
    return tuple(op.original for op in ops if op.original is not None)


def revised_side(ops: Sequence[AlignmentOp]) -> Tuple[Token, ...]:
    """Tokens of the revised text, in op order (Match, Substitute, Insert)."""
    return tuple(op.revised for op in ops if op.revised is not None)


def align(
    original_tokens: Sequence[Token],
    revised_tokens: Sequence[Token],
    max_grid_cells: Optional[int] = None,
    diff_timeout: Optional[float] = None,
) -> List[AlignmentOp]:
    """
    Computes an ordered list of alignment operations between two token sequences.

    Whitespace tokens only ever Match (when identical) or fall out as a
    Delete + Insert pair; Substitute is reserved for word-for-word replacement.

    The Myers path encodes each distinct token text as one code point, so it
    raises ValueError past MAX_DISTINCT_TOKENS (1,114,112) distinct tokens. The CLI and server keep
    inputs far below that through MAX_INPUT_CHARS.
    """
    if max_grid_cells is None:
        max_grid_cells = config.MAX_GRID_CELLS
    if diff_timeout is None:
        diff_timeout = config.DIFF_TIMEOUT

    m, n = len(original_tokens), len(revised_tokens)
    if m * n > max_grid_cells:
        strategy = "myers"
        ops = _myers_align(original_tokens, revised_tokens, diff_timeout)
    else:
        strategy = "grid"
        ops = _grid_align(original_tokens, revised_tokens)

    ops = _collapse_replacements(ops)
    logger.debug("Aligned token sequences", strategy=strategy, original_tokens=m, revised_tokens=n, ops=len(ops))
    return ops


def _substitutable(a: Token, b: Token) -> bool:
    return not a.is_space and not b.is_space


def _suffix_costs(a: Sequence[Token], b: Sequence[Token]) -> List[List[int]]:
    """
    cost[i][j] = minimum edits aligning a[i:] with b[j:].
    Built over suffixes so the path can be read off front to back.
    """
    m, n = len(a), len(b)
    cost = [[0] * (n + 1) for _ in range(m + 1)]
    for j in range(n + 1):
        cost[m][j] = n - j

    for i in range(m - 1, -1, -1):
        row = cost[i]
        below = cost[i + 1]
        row[n] = m - i
        x = a[i]
        for j in range(n - 1, -1, -1):
            y = b[j]
            best = min(below[j], row[j + 1]) + 1
            if x.text == y.text:
                best = min(best, below[j + 1])
            elif _substitutable(x, y):
                best = min(best, below[j + 1] + 1)
            row[j] = best
    return cost


def _grid_align(a: Sequence[Token], b: Sequence[Token]) -> List[AlignmentOp]:
    cost = _suffix_costs(a, b)
    m, n = len(a), len(b)
    ops: List[AlignmentOp] = []
    i = j = 0

    # Tie-break order: Match, Substitute, Delete, Insert
    while i < m or j < n:
        here = cost[i][j]
        if i < m and j < n:
            x, y = a[i], b[j]
            diagonal = cost[i + 1][j + 1]
            if x.text == y.text and diagonal == here:
                ops.append(Match(x, y))
                i += 1
                j += 1
                continue
            if x.text != y.text and _substitutable(x, y) and diagonal + 1 == here:
                ops.append(Substitute(x, y))
                i += 1
                j += 1
                continue
        if i < m and cost[i + 1][j] + 1 == here:
            ops.append(Delete(a[i]))
            i += 1
        else:
            ops.append(Insert(b[j]))
            j += 1
    return ops


def _myers_align(a: Sequence[Token], b: Sequence[Token], diff_timeout: float) -> List[AlignmentOp]:
    dmp = diff_match_patch()
    # Past the deadline dmp falls back to delete-all / insert-all for the unresolved span
    dmp.Diff_Timeout = diff_timeout

    chars1, chars2 = _tokens_to_chars(a, b)
    diffs = dmp.diff_main(chars1, chars2, False)

    ops: List[AlignmentOp] = []
    i = j = 0
    for op, chunk in diffs:
        for _ in chunk:
            if op == diff_match_patch.DIFF_EQUAL:
                ops.append(Match(a[i], b[j]))
                i += 1
                j += 1
            elif op == diff_match_patch.DIFF_DELETE:
                ops.append(Delete(a[i]))
                i += 1
            else:
                ops.append(Insert(b[j]))
                j += 1
    return ops


def _tokens_to_chars(a: Sequence[Token], b: Sequence[Token]) -> Tuple[str, str]:
    """
    Encodes each distinct token text as a single character so a character
    diff becomes a token diff.
    """
    token_hash: Dict[str, int] = {}

    def encode(tokens: Sequence[Token]) -> str:
        encoded_chars = []
        for token in tokens:
            code = token_hash.setdefault(token.text, len(token_hash))
            if code >= MAX_DISTINCT_TOKENS:
                raise ValueError(f"More than {MAX_DISTINCT_TOKENS} distinct tokens cannot be encoded for the Myers diff.")
            encoded_chars.append(chr(code))
        return "".join(encoded_chars)

    return encode(a), encode(b)


def _collapse_replacements(ops: List[AlignmentOp]) -> List[AlignmentOp]:
    """
    Re-classifies deleted and inserted words that sit in the same run of
    Delete/Insert ops (no Match or Substitute between them) as Substitutes.
    """
    result: List[AlignmentOp] = []
    pending: List[AlignmentOp] = []
    for op in ops:
        if isinstance(op, (Delete, Insert)):
            pending.append(op)
            continue
        result.extend(_pair_words(pending))
        pending = []
        result.append(op)
    result.extend(_pair_words(pending))
    return result


def _pair_words(run: List[AlignmentOp]) -> List[AlignmentOp]:
    deleted = [op.original for op in run if isinstance(op, Delete)]
    inserted = [op.revised for op in run if isinstance(op, Insert)]
    if not any(not t.is_space for t in deleted) or not any(not t.is_space for t in inserted):
        return run

    # Whitespace is emitted as soon as it is reached so neither side is reordered
    paired: List[AlignmentOp] = []
    d = k = 0
    while d < len(deleted) or k < len(inserted):
        if d < len(deleted) and (deleted[d].is_space or k == len(inserted)):
            paired.append(Delete(deleted[d]))
            d += 1
        elif k < len(inserted) and (inserted[k].is_space or d == len(deleted)):
            paired.append(Insert(inserted[k]))
            k += 1
        else:
            paired.append(Substitute(deleted[d], inserted[k]))
            d += 1
            k += 1
    return paired

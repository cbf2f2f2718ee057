"""
Maps alignment operations onto two parallel lists of renderable segments.
"""

from typing import List, Sequence, Tuple

from revdiff.aligner import AlignmentOp, Delete, Insert, Match, Substitute
from revdiff.models import DiffStats, Segment, SegmentRole


def present(ops: Sequence[AlignmentOp]) -> Tuple[List[Segment], List[Segment]]:
    """
    Converts ops into (original_segments, revised_segments).

    Keys are "{op_index}-{variant}", so the same alignment always yields the
    same keys. A Match shares its key across both views; a Substitute gets a
    correlated pair ("-original" / "-revised"). Whitespace that was deleted or
    inserted is passed through unstyled so spacing survives in both views.
    """
    original_segments: List[Segment] = []
    revised_segments: List[Segment] = []

    for idx, op in enumerate(ops):
        key = f"{idx}-{op.variant}"

        if isinstance(op, Match):
            original_segments.append(Segment(text=op.original.text, role=SegmentRole.UNCHANGED, stable_key=key))
            revised_segments.append(Segment(text=op.revised.text, role=SegmentRole.UNCHANGED, stable_key=key))

        elif isinstance(op, Substitute):
            original_segments.append(
                Segment(text=op.original.text, role=SegmentRole.REPLACED, stable_key=f"{key}-original")
            )
            revised_segments.append(Segment(text=op.revised.text, role=SegmentRole.REPLACED, stable_key=f"{key}-revised"))

        elif isinstance(op, Delete):
            role = SegmentRole.UNCHANGED if op.original.is_space else SegmentRole.REMOVED
            original_segments.append(Segment(text=op.original.text, role=role, stable_key=key))

        elif isinstance(op, Insert):
            role = SegmentRole.UNCHANGED if op.revised.is_space else SegmentRole.ADDED
            revised_segments.append(Segment(text=op.revised.text, role=role, stable_key=key))

    return original_segments, revised_segments


def summarize(ops: Sequence[AlignmentOp]) -> DiffStats:
    counts = {"match": 0, "substitute": 0, "insert": 0, "delete": 0}
    changed_words = 0
    for op in ops:
        counts[op.variant] += 1
        if isinstance(op, Match):
            continue
        if any(t is not None and not t.is_space for t in (op.original, op.revised)):
            changed_words += 1

    return DiffStats(
        matched=counts["match"],
        substituted=counts["substitute"],
        inserted=counts["insert"],
        deleted=counts["delete"],
        changed_words=changed_words,
    )

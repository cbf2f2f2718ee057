"""
Plain-text renderings of an alignment: inline CriticMarkup, a two-block
side-by-side view, and a list of changed passages.
"""

from dataclasses import dataclass
from typing import List, Sequence

from revdiff.aligner import AlignmentOp, Delete, Insert, Match, Substitute
from revdiff.models import DiffResult, Segment, SegmentRole


@dataclass(frozen=True)
class Change:
    original_text: str
    revised_text: str

    @property
    def symbol(self) -> str:
        if not self.revised_text:
            return "-"
        if not self.original_text:
            return "+"
        return "~"


def render_critic_markup(ops: Sequence[AlignmentOp]) -> str:
    """
    Renders the alignment as one CriticMarkup string:
    - Deletions: {--deleted text--}
    - Insertions: {++inserted text++}
    - Substitutions: {--old--}{++new++}

    Neighbouring changes separated only by whitespace share one marker.
    Dropping the {--...--} blocks and unwrapping {++...++} gives back the
    revised text exactly.
    """
    out: List[str] = []
    deleted: List[str] = []
    inserted: List[str] = []
    # Revised-side whitespace that sits between the two markers
    gap: List[str] = []
    # Matched whitespace directly after a change, folded in if another change follows
    held: List[str] = []

    def flush():
        del_text = "".join(deleted).rstrip()
        ins_text = "".join(inserted)
        ins_core = ins_text.rstrip()
        if del_text:
            out.append(f"{{--{del_text}--}}")
        out.extend(gap)
        if ins_core:
            out.append(f"{{++{ins_core}++}}")
        out.append(ins_text[len(ins_core) :])
        out.extend(held)
        for buf in (deleted, inserted, gap, held):
            buf.clear()

    def add_revised_space(text: str):
        if inserted:
            inserted.append(text)
        elif deleted:
            gap.append(text)
        else:
            out.append(text)

    for op in ops:
        if isinstance(op, Match):
            if op.revised.is_space and (deleted or inserted) and not held:
                held.append(op.revised.text)
                continue
            flush()
            out.append(op.revised.text)
            continue

        if held:
            if deleted:
                deleted.extend(held)
            add_revised_space("".join(held))
            held.clear()

        if isinstance(op, Substitute):
            deleted.append(op.original.text)
            inserted.append(op.revised.text)
        elif isinstance(op, Delete):
            # Whitespace-only deletions vanish at flush time
            deleted.append(op.original.text)
        elif isinstance(op, Insert):
            if op.revised.is_space:
                add_revised_space(op.revised.text)
            else:
                inserted.append(op.revised.text)
    flush()

    return "".join(out)


def _mark(segment: Segment, opener: str, closer: str) -> str:
    if segment.role is SegmentRole.UNCHANGED:
        return segment.text
    return f"{opener}{segment.text}{closer}"


def render_side_by_side(result: DiffResult) -> str:
    original = "".join(_mark(s, "[-", "-]") for s in result.original_segments)
    revised = "".join(_mark(s, "{+", "+}") for s in result.revised_segments)
    return f"ORIGINAL:\n{original}\n\nREVISED:\n{revised}"


def collect_changes(ops: Sequence[AlignmentOp]) -> List[Change]:
    """
    Groups every run of non-matching ops into one Change.
    Runs that only touch whitespace are left out.
    """
    changes: List[Change] = []
    original_run: List[str] = []
    revised_run: List[str] = []

    def close_run():
        original_text = "".join(original_run).strip()
        revised_text = "".join(revised_run).strip()
        if original_text or revised_text:
            changes.append(Change(original_text=original_text, revised_text=revised_text))
        original_run.clear()
        revised_run.clear()

    for op in ops:
        if isinstance(op, Match):
            close_run()
            continue
        if op.original is not None:
            original_run.append(op.original.text)
        if op.revised is not None:
            revised_run.append(op.revised.text)
    close_run()

    return changes

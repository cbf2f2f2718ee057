from enum import Enum
from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field


class SegmentRole(str, Enum):
    UNCHANGED = "UNCHANGED"
    REMOVED = "REMOVED"
    ADDED = "ADDED"
    REPLACED = "REPLACED"


class Segment(BaseModel):
    """
    A renderable span of one side of the diff.
    Matched spans carry the same stable_key in both views.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Exact source text of the span, whitespace included.")
    role: SegmentRole = Field(..., description="UNCHANGED, REMOVED, ADDED, or REPLACED.")
    stable_key: str = Field(
        ...,
        description="Deterministic key, unique within one diff (e.g. '3-match', '5-substitute-original').",
    )


class DiffStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    matched: int = 0
    substituted: int = 0
    inserted: int = 0
    deleted: int = 0
    changed_words: int = Field(0, description="Non-matching operations that touch a word token.")

    @computed_field
    @property
    def edit_distance(self) -> int:
        return self.substituted + self.inserted + self.deleted

    @property
    def has_changes(self) -> bool:
        return self.edit_distance > 0


class DiffResult(BaseModel):
    """
    Side-by-side view of an original text and its revision.
    """

    model_config = ConfigDict(frozen=True)

    original_segments: List[Segment] = Field(default_factory=list)
    revised_segments: List[Segment] = Field(default_factory=list)
    stats: DiffStats = Field(default_factory=DiffStats)


class WritingMode(str, Enum):
    """Request modes understood by the correction service."""

    BUSINESS_EMAIL = "Business Email"
    ACADEMIC_ESSAY = "Academic Essay"
    RESUME_BULLETS = "Resume Bullet Points"
    CREATIVE_WRITING = "Creative Writing"
    BLOG_PARAGRAPH = "Blog Paragraph"
    INBOX_INTEL = "Inbox Optimization Intelligence"
    CORRECTION = "Correction"


WritingStyle = Literal["email", "academic", "professional", "creative", "friendly", "normal"]

MODE_STYLES: Dict[WritingMode, WritingStyle] = {
    WritingMode.BUSINESS_EMAIL: "email",
    WritingMode.ACADEMIC_ESSAY: "academic",
    WritingMode.RESUME_BULLETS: "professional",
    WritingMode.CREATIVE_WRITING: "creative",
    WritingMode.BLOG_PARAGRAPH: "friendly",
    WritingMode.INBOX_INTEL: "professional",
    WritingMode.CORRECTION: "normal",
}


def style_for_mode(mode: WritingMode) -> WritingStyle:
    return MODE_STYLES.get(mode, "normal")

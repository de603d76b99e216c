"""Render pending suggestions as highlight segments over the document."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from linguist.models.suggestion import Suggestion, SuggestionType


@dataclass(frozen=True)
class Segment:
    """A run of document text, optionally tagged with the suggestion covering it."""

    text: str
    suggestion_id: str | None = None
    category: SuggestionType | None = None
    explanation: str | None = None
    paragraph: int = 0

    @property
    def is_highlight(self) -> bool:
        return self.suggestion_id is not None


def render_paragraph(
    paragraph: str,
    suggestions: Sequence[Suggestion],
    index: int = 0,
) -> list[Segment]:
    """Split one paragraph into plain and highlighted segments.

    Each suggestion is located by its first exact occurrence.  Matches are
    taken left to right; a match starting inside an already highlighted run is
    dropped.  Joining the segment texts gives back ``paragraph``.
    """
    matches = []
    for s in suggestions:
        if not s.original_text:
            continue
        start = paragraph.find(s.original_text)
        if start != -1:
            matches.append((start, s))
    # sort is stable: equal offsets keep generation order
    matches.sort(key=lambda m: m[0])

    segments: list[Segment] = []
    cursor = 0
    for start, s in matches:
        if start < cursor:
            continue
        if start > cursor:
            segments.append(Segment(paragraph[cursor:start], paragraph=index))
        end = start + len(s.original_text)
        segments.append(
            Segment(
                paragraph[start:end],
                suggestion_id=s.id,
                category=s.category,
                explanation=s.explanation,
                paragraph=index,
            )
        )
        cursor = end

    if cursor < len(paragraph):
        segments.append(Segment(paragraph[cursor:], paragraph=index))
    return segments


def render_overlay(document: str, suggestions: Sequence[Suggestion]) -> list[Segment]:
    """Render the whole document, one paragraph per line.

    Line breaks are emitted as plain ``"\\n"`` segments so that joining every
    segment's text reproduces ``document`` exactly.  A suggestion spanning a
    line break is never highlighted.
    """
    segments: list[Segment] = []
    for i, paragraph in enumerate(document.split("\n")):
        if i:
            segments.append(Segment("\n", paragraph=i - 1))
        segments.extend(render_paragraph(paragraph, suggestions, index=i))
    return segments


def paragraphs(segments: Sequence[Segment]) -> list[list[Segment]]:
    """Group rendered segments back into paragraphs, dropping the line breaks."""
    grouped: list[list[Segment]] = []
    for seg in segments:
        while len(grouped) <= seg.paragraph:
            grouped.append([])
        if seg.text == "\n" and not seg.is_highlight:
            continue
        grouped[seg.paragraph].append(seg)
    return grouped

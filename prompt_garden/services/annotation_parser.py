"""Parse the prompt annotation syntax into typed segments.

Prompt content is free text with three kinds of line-level markers:

* ``1. Ask a follow-up``: a numbered line opens a follow-up. Non-blank lines
  right below it continue the same follow-up until a blank line, another
  numbered line, a note, a code fence or a heading closes it.
* ``> context for the reader``: note lines. Consecutive notes form one note.
* everything else is plain text. Markers inside fenced code blocks are not
  interpreted.

``[VARIABLE]`` placeholders may appear anywhere. They are upper-cased in the
display parts only; stored and copied text keeps them as written.
"""
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from prompt_garden.types.segment_types import PartType, SegmentType

FOLLOWUP_RE = re.compile(r"^(\d+)\.\s+(\S.*)$")
NOTE_RE = re.compile(r"^\s*>\s?(.*)$")
FENCE_RE = re.compile(r"^\s*```")
HEADING_RE = re.compile(r"^\s*#{1,6}(\s|$)")
VARIABLE_RE = re.compile(r"\[([^\[\]\n]+)\]")
EXTRA_BLANK_LINES_RE = re.compile(r"\n\s*\n\s*\n")


@dataclass(frozen=True)
class Segment:
    type: SegmentType
    content: str
    start: int  # first line, zero-based
    end: int  # one past the last line
    index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "type": self.type.value,
            "content": self.content,
            "lines": [self.start, self.end],
            "parts": split_variables(self.content),
        }
        if self.index is not None:
            data["index"] = self.index
        return data


def _closes_followup(line: str) -> bool:
    return (
        not line.strip()
        or bool(FOLLOWUP_RE.match(line))
        or bool(NOTE_RE.match(line))
        or bool(FENCE_RE.match(line))
        or bool(HEADING_RE.match(line))
    )


def parse_annotations(content: str) -> List[Segment]:
    """Split prompt content into ordered text/note/followup segments.

    Segments cover every line of the input exactly once and in order.
    CRLF line endings are normalised to LF, so segment content of CRLF input
    differs from the raw input by its line endings only.
    """
    if not content:
        return []

    lines = content.replace("\r\n", "\n").split("\n")
    segments: List[Segment] = []

    kind: Optional[SegmentType] = None
    start = 0
    body: List[str] = []
    index: Optional[int] = None
    in_fence = False

    def close(end: int):
        nonlocal kind, body, index
        if kind is not None:
            segments.append(Segment(kind, "\n".join(body), start, end, index))
        kind, body, index = None, [], None

    def begin(new_kind: SegmentType, at: int, first: str, new_index: Optional[int] = None):
        nonlocal kind, start, body, index
        close(at)
        kind, start, body, index = new_kind, at, [first], new_index

    for i, line in enumerate(lines):
        if in_fence:
            body.append(line)
            if FENCE_RE.match(line):
                in_fence = False
            continue

        if kind is SegmentType.FOLLOWUP and not _closes_followup(line):
            body.append(line.strip())
            continue

        followup = FOLLOWUP_RE.match(line)
        note = NOTE_RE.match(line)
        if followup:
            begin(SegmentType.FOLLOWUP, i, followup.group(2).strip(), int(followup.group(1)))
        elif note:
            if kind is SegmentType.NOTE:
                body.append(note.group(1).rstrip())
            else:
                begin(SegmentType.NOTE, i, note.group(1).rstrip())
        else:
            if FENCE_RE.match(line):
                in_fence = True
            if kind is SegmentType.TEXT:
                body.append(line)
            else:
                begin(SegmentType.TEXT, i, line)

    close(len(lines))
    return segments


def split_variables(text: str) -> List[Dict[str, str]]:
    """Break text into display parts, upper-casing ``[VARIABLE]`` tokens."""
    parts: List[Dict[str, str]] = []
    last = 0
    for match in VARIABLE_RE.finditer(text):
        if match.start() > last:
            parts.append({"type": PartType.TEXT.value, "content": text[last:match.start()]})
        parts.append({
            "type": PartType.VARIABLE.value,
            "content": match.group(1).strip().upper(),
            "raw": match.group(0),
        })
        last = match.end()
    if last < len(text):
        parts.append({"type": PartType.TEXT.value, "content": text[last:]})
    return parts


def extract_variables(content: str) -> List[str]:
    """Unique variable names (upper-cased) in order of first appearance."""
    seen: List[str] = []
    for match in VARIABLE_RE.finditer(content or ""):
        name = match.group(1).strip().upper()
        if name and name not in seen:
            seen.append(name)
    return seen


def fill_variables(content: str, values: Mapping[str, Any]) -> str:
    """Replace ``[NAME]`` tokens with provided values, matching names case-insensitively.

    Tokens without a value are left untouched.
    """
    lookup = {str(k).strip().upper(): v for k, v in (values or {}).items() if v is not None}

    def _sub(match):
        name = match.group(1).strip().upper()
        if name in lookup:
            return str(lookup[name])
        return match.group(0)

    return VARIABLE_RE.sub(_sub, content or "")


def clean_content(content: str) -> str:
    """Text to put on the clipboard: notes and follow-ups removed."""
    kept = [s.content for s in parse_annotations(content) if s.type is SegmentType.TEXT]
    return EXTRA_BLANK_LINES_RE.sub("\n\n", "\n".join(kept)).strip()


def analyze_content(content: str) -> Dict[str, Any]:
    """Everything a client needs to render and copy a prompt."""
    segments = parse_annotations(content)
    return {
        "segments": [s.to_dict() for s in segments],
        "followups": [
            {"index": s.index, "content": s.content} for s in segments if s.type is SegmentType.FOLLOWUP
        ],
        "variables": extract_variables(content),
        "cleanContent": clean_content(content),
    }


__all__ = [
    "Segment",
    "parse_annotations",
    "split_variables",
    "extract_variables",
    "fill_variables",
    "clean_content",
    "analyze_content",
]

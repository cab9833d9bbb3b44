from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence


def utc_now_iso() -> str:
    """UTC timestamp with millisecond precision and a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_tags(tags: Iterable[str]) -> List[str]:
    """Strip tags and drop blanks and repeats, keeping first-seen order."""
    seen = set()
    result = []
    for tag in tags:
        name = str(tag).strip()
        if name and name not in seen:
            seen.add(name)
            result.append(name)
    return result


def split_tags(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return normalize_tags(value.split(","))


@dataclass
class Prompt:
    """One row of the Prompts sheet.

    ``row_number`` is the 1-based sheet row the prompt was read from; it is
    not part of the stored record and is None for prompts not yet written.
    """

    id: str
    content: str
    title: str = ""
    tags: List[str] = field(default_factory=list)
    category: Optional[str] = None
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)
    row_number: Optional[int] = None

    @classmethod
    def from_row(cls, row: Sequence[Any], row_number: Optional[int] = None) -> "Prompt":
        cells = [str(c) if c is not None else "" for c in row] + [""] * (7 - len(row))
        prompt_id, title, content, tags, category, created_at, updated_at = cells[:7]
        now = utc_now_iso()
        return cls(
            id=prompt_id,
            title=title,
            content=content,
            tags=split_tags(tags),
            category=category or None,
            created_at=created_at or now,
            updated_at=updated_at or now,
            row_number=row_number,
        )

    def to_row(self) -> List[str]:
        return [
            self.id,
            self.title or "",
            self.content,
            ", ".join(self.tags),
            self.category or "",
            self.created_at,
            self.updated_at,
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags),
            "category": self.category,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def copy(self, **changes) -> "Prompt":
        return replace(self, **changes)

    def __repr__(self):
        return f"<Prompt {self.id} {self.title!r}>"

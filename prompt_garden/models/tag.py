from dataclasses import dataclass
from typing import Any, Dict, List, Sequence


@dataclass
class Tag:
    name: str
    count: int = 0
    is_category: bool = False

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "Tag":
        cells = [str(c) for c in row] + [""] * (3 - len(row))
        name, count, is_category = cells[:3]
        try:
            parsed_count = int(count)
        except ValueError:
            parsed_count = 0
        return cls(name=name, count=parsed_count, is_category=is_category.strip().lower() == "true")

    def to_row(self) -> List[str]:
        return [self.name, str(self.count), "true" if self.is_category else "false"]

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "count": self.count, "isCategory": self.is_category}

    def __repr__(self):
        return f"<Tag {self.name} x{self.count}>"

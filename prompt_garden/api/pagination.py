from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

PAGINATION_KEYS = ("page", "pageSize", "per_page", "sortBy", "sortOrder")
DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 100


def _as_int(value: Any, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


@dataclass
class PageRequest:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: str = "updatedAt"
    descending: bool = True

    @classmethod
    def from_args(cls, args: Optional[Mapping[str, str]], default_sort: str,
                  sort_fields: Mapping[str, str]) -> "PageRequest":
        args = args or {}
        # `per_page` is still accepted from older clients
        size = args.get("pageSize", args.get("per_page"))
        sort_by = args.get("sortBy") or default_sort
        return cls(
            page=max(_as_int(args.get("page"), 1), 1),
            page_size=min(max(_as_int(size, DEFAULT_PAGE_SIZE), 1), MAX_PAGE_SIZE),
            sort_by=sort_by if sort_by in sort_fields else default_sort,
            descending=str(args.get("sortOrder") or "desc").lower() != "asc",
        )


def _sort_key(attr: str):
    def key(item):
        value = getattr(item, attr, None)
        if value is None:
            return ""
        return value.lower() if isinstance(value, str) else value
    return key


def paginate_items(
    items: Sequence[Any],
    request_args: Optional[Mapping[str, str]],
    serialize: Optional[Callable[[Any], Dict]] = None,
    *,
    default_sort: str = "updatedAt",
    sort_fields: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Sort and slice an already loaded list (the sheet is always read whole).

    `sort_fields` maps public sort names to item attributes; an unknown
    `sortBy` falls back to `default_sort`. Items are serialized with
    `serialize` or their own `to_dict()`.
    Returns {"meta": {...}, "data": [...]}.
    """
    fields = dict(sort_fields or {default_sort: default_sort})
    req = PageRequest.from_args(request_args, default_sort, fields)

    ordered = sorted(items, key=_sort_key(fields.get(req.sort_by, req.sort_by)), reverse=req.descending)
    start = (req.page - 1) * req.page_size
    to_dict = serialize or (lambda item: item.to_dict())

    return {
        "meta": {
            "total": len(ordered),
            "page": req.page,
            "pageSize": req.page_size,
            "total_pages": -(-len(ordered) // req.page_size),
            "sortBy": req.sort_by,
            "sortOrder": "desc" if req.descending else "asc",
        },
        "data": [to_dict(item) for item in ordered[start:start + req.page_size]],
    }


def has_pagination_args(request_args: Optional[Mapping[str, str]]) -> bool:
    """True when the query string asks for paging or sorting."""
    return bool(request_args) and any(k in request_args for k in PAGINATION_KEYS)


__all__ = ["PageRequest", "paginate_items", "has_pagination_args"]

import uuid
from typing import Any, Dict, List, Optional

import structlog
from flask import current_app

from prompt_garden.extensions import cache, sheets
from prompt_garden.models.prompt import Prompt, normalize_tags, split_tags, utc_now_iso
from prompt_garden.services import tag_service
from prompt_garden.sheets.layout import FIRST_DATA_ROW, PROMPTS_SHEET, data_range, row_range

log = structlog.get_logger()

ALL_PROMPTS_KEY = "all_prompts"
UPDATABLE_FIELDS = ("title", "content", "tags", "category")


class ServiceError(Exception):
    pass


class NotFoundError(ServiceError):
    pass


class BadRequestError(ServiceError):
    pass


# --- parsing helpers -------------------------------------------------------

def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise BadRequestError(f"'{key}' must be a string")
    return value.strip()


def parse_tags(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return split_tags(value)
    if isinstance(value, list) and all(isinstance(t, str) for t in value):
        # the sheet stores tags comma-joined, so a comma inside an item splits it
        return normalize_tags(part for t in value for part in t.split(","))
    raise BadRequestError("'tags' must be a list of strings or a comma-separated string")


def _parse_content(data: dict) -> str:
    content = data.get("content")
    if not isinstance(content, str) or not content.strip():
        raise BadRequestError("'content' is required")
    return content


# --- reads -----------------------------------------------------------------

def read_prompts() -> List[Prompt]:
    """Read every prompt row straight from the sheet, bypassing the cache."""
    rows = sheets.client.get_values(data_range(PROMPTS_SHEET))
    prompts = []
    for offset, row in enumerate(rows):
        # deleted prompts leave blank rows behind until the sheet is compacted
        if not row or not str(row[0]).strip():
            continue
        prompts.append(Prompt.from_row(row, row_number=FIRST_DATA_ROW + offset))
    return prompts


def get_all_prompts() -> List[Prompt]:
    """
    Get all prompts in sheet order and cache the result until the next mutation.
    """
    prompts = cache.get(ALL_PROMPTS_KEY)
    if prompts is None:
        prompts = read_prompts()
        cache.set(ALL_PROMPTS_KEY, prompts, timeout=current_app.config.get("PROMPTS_CACHE_TIMEOUT"))
    return prompts


def _find(prompt_id: str, prompts: List[Prompt]) -> Prompt:
    for prompt in prompts:
        if prompt.id == prompt_id:
            return prompt
    raise NotFoundError(f"Prompt id={prompt_id} not found")


def get_prompt_by_id(prompt_id: str) -> Prompt:
    return _find(prompt_id, get_all_prompts())


def get_prompts_by_tag(tag: str) -> List[Prompt]:
    """Prompts carrying the tag, or filed under it as category (case-insensitive)."""
    needle = tag.strip().lower()
    return [
        p for p in get_all_prompts()
        if any(t.lower() == needle for t in p.tags) or (p.category or "").lower() == needle
    ]


def search_prompts(query: str) -> List[Prompt]:
    needle = (query or "").strip().lower()
    if not needle:
        return get_all_prompts()
    return [p for p in get_all_prompts() if needle in p.title.lower() or needle in p.content.lower()]


def list_prompts(tag: Optional[str] = None, query: Optional[str] = None) -> List[Prompt]:
    if tag:
        return get_prompts_by_tag(tag)
    if query:
        return search_prompts(query)
    return get_all_prompts()


# --- writes ----------------------------------------------------------------

def refresh_indexes() -> List[Prompt]:
    """Re-read the prompts after a mutation, re-prime the cache and recount tags."""
    cache.delete(ALL_PROMPTS_KEY)
    prompts = read_prompts()
    cache.set(ALL_PROMPTS_KEY, prompts, timeout=current_app.config.get("PROMPTS_CACHE_TIMEOUT"))
    tag_service.update_tag_counts(prompts)
    return prompts


def create_prompt(data: dict, refresh: bool = True) -> Prompt:
    """Validate a payload and append it as a new row.

    Accepts {content: str, title?: str, tags?: list|str, category?: str}.
    """
    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object.")

    now = utc_now_iso()
    prompt = Prompt(
        id=str(uuid.uuid4()),
        title=_optional_str(data, "title") or "",
        content=_parse_content(data),
        tags=parse_tags(data.get("tags")),
        category=_optional_str(data, "category") or None,
        created_at=now,
        updated_at=now,
    )
    sheets.client.append_values(data_range(PROMPTS_SHEET), [prompt.to_row()])
    log.info("prompt.created", id=prompt.id, title=prompt.title, tags=prompt.tags)

    if refresh:
        refresh_indexes()
    return prompt


def update_prompt(prompt_id: str, data: dict, refresh: bool = True) -> Prompt:
    """Apply a partial update; keys absent from `data` keep their stored value."""
    if not isinstance(data, dict) or not data:
        raise BadRequestError("No data provided.")
    if not any(key in data for key in UPDATABLE_FIELDS):
        raise BadRequestError(f"Nothing to update; expected one of: {', '.join(UPDATABLE_FIELDS)}")

    # row numbers must come from a fresh read, cached rows may have moved
    existing = _find(prompt_id, read_prompts())

    changes: Dict[str, Any] = {}
    if "title" in data:
        changes["title"] = _optional_str(data, "title") or ""
    if "content" in data:
        changes["content"] = _parse_content(data)
    if "tags" in data:
        changes["tags"] = parse_tags(data.get("tags"))
    if "category" in data:
        changes["category"] = _optional_str(data, "category") or None

    updated = existing.copy(updated_at=utc_now_iso(), **changes)
    sheets.client.update_values(row_range(PROMPTS_SHEET, existing.row_number), [updated.to_row()])
    log.info("prompt.updated", id=prompt_id, fields=sorted(changes))

    if refresh:
        refresh_indexes()
    return updated


def delete_prompt(prompt_id: str) -> Prompt:
    """Clear the prompt's row. The blank row stays until `compact_prompts` runs."""
    existing = _find(prompt_id, read_prompts())
    sheets.client.clear_values(row_range(PROMPTS_SHEET, existing.row_number))
    log.info("prompt.deleted", id=prompt_id, row=existing.row_number)
    refresh_indexes()
    return existing


def compact_prompts() -> int:
    """Rewrite the Prompts sheet without the blank rows left by deletes."""
    prompts = read_prompts()
    client = sheets.client
    client.clear_values(data_range(PROMPTS_SHEET))
    if prompts:
        client.append_values(data_range(PROMPTS_SHEET), [p.to_row() for p in prompts])
    log.info("prompts.compacted", count=len(prompts))
    refresh_indexes()
    return len(prompts)


def build_remix(prompt_id: str) -> Dict[str, Any]:
    """Prefill payload for creating a new prompt from an existing one."""
    prompt = get_prompt_by_id(prompt_id)
    return {
        "title": f"{prompt.title or 'Untitled Prompt'} (Remix)",
        "content": prompt.content,
        "tags": list(prompt.tags),
    }

from typing import Dict, Iterable, List

import structlog
from flask import current_app

from prompt_garden.extensions import cache, sheets
from prompt_garden.models.prompt import Prompt
from prompt_garden.models.tag import Tag
from prompt_garden.sheets.layout import TAGS_SHEET, data_range

log = structlog.get_logger()

ALL_TAGS_KEY = "all_tags"


def count_tags(prompts: Iterable[Prompt]) -> List[Tag]:
    """Aggregate tag usage over all prompts.

    Each prompt counts once per tag; its category counts as a tag too and
    marks that name as a category. Order follows first appearance.
    """
    tags: Dict[str, Tag] = {}
    for prompt in prompts:
        for name in prompt.tags:
            name = name.strip()
            if not name:
                continue
            tag = tags.setdefault(name, Tag(name=name))
            tag.count += 1
        category = (prompt.category or "").strip()
        if category:
            tag = tags.setdefault(category, Tag(name=category))
            tag.count += 1
            tag.is_category = True
    return list(tags.values())


def update_tag_counts(prompts: Iterable[Prompt]) -> List[Tag]:
    """Rewrite the Tags sheet from the given prompts."""
    tags = count_tags(prompts)
    client = sheets.client
    client.clear_values(data_range(TAGS_SHEET))
    if tags:
        client.append_values(data_range(TAGS_SHEET), [t.to_row() for t in tags])
    cache.set(ALL_TAGS_KEY, tags, timeout=current_app.config.get("PROMPTS_CACHE_TIMEOUT"))
    log.info("tags.recounted", tags=len(tags), categories=sum(1 for t in tags if t.is_category))
    return tags


def get_all_tags() -> List[Tag]:
    tags = cache.get(ALL_TAGS_KEY)
    if tags is None:
        rows = sheets.client.get_values(data_range(TAGS_SHEET))
        tags = [Tag.from_row(row) for row in rows if row and str(row[0]).strip()]
        cache.set(ALL_TAGS_KEY, tags, timeout=current_app.config.get("PROMPTS_CACHE_TIMEOUT"))
    return tags


def get_categories() -> List[str]:
    return [t.name for t in get_all_tags() if t.is_category]

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

import structlog

from prompt_garden.services import prompt_service, setup_service

log = structlog.get_logger()

TEXT_SUFFIXES = (".md", ".txt")


def _entries_from_json(payload: Any) -> Iterator[Dict[str, Any]]:
    """Yield prompt payloads from the JSON shapes accepted in seed files.

    1) {"title": "...", "content": "...", "tags": [...], "category": "..."}
    2) {"Prompt A": "content A", ...}  (mapping title -> content)
    3) [ {"title": "...", "content": "..."}, ... ]
    """
    if isinstance(payload, dict) and "content" in payload:
        yield payload
    elif isinstance(payload, dict) and all(isinstance(v, str) for v in payload.values()):
        for title, content in payload.items():
            yield {"title": title, "content": content}
    elif isinstance(payload, list):
        for item in payload:
            if isinstance(item, dict) and "content" in item:
                yield item


def load_seed_entries(prompts_dir: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read every seed file in `prompts_dir`, sorted by file name.

    Text files become one prompt titled after the file stem. Files that
    cannot be read or parsed are logged and skipped.
    """
    entries = []
    for path in sorted(Path(prompts_dir).iterdir()):
        if not path.is_file():
            continue
        suffix = path.suffix.lower()
        try:
            if suffix == ".json":
                with open(path, "r", encoding="utf-8") as fh:
                    entries.extend(_entries_from_json(json.load(fh)))
            elif suffix in TEXT_SUFFIXES:
                entries.append({"title": path.stem, "content": path.read_text(encoding="utf-8")})
        except (OSError, ValueError) as e:
            log.warning("seed.file.skipped", path=str(path), error=str(e))
    return entries


def _differs(existing, entry: Dict[str, Any]) -> bool:
    if existing.content != entry.get("content"):
        return True
    if "tags" in entry and existing.tags != prompt_service.parse_tags(entry.get("tags")):
        return True
    if "category" in entry and (existing.category or None) != ((entry.get("category") or "").strip() or None):
        return True
    return False


def run(app, prompts_dir: Optional[Union[str, Path]] = None, init_sheets: bool = False) -> dict:
    """Seed prompts from a directory into the Prompts sheet.

    - If `prompts_dir` is not provided, default to `seeds/examples`.
    - Prompts are matched by title: unknown titles are created, known ones
      are rewritten only when their content, tags or category changed.
    - Tag counts are recomputed once at the end.

    Returns a summary dict: {"created": int, "updated": int, "prompts": {title: content}}.
    """
    if prompts_dir is None:
        prompts_dir = os.path.join(app.root_path, 'seeds', 'examples')

    if not os.path.isdir(prompts_dir):
        raise FileNotFoundError(f'Prompts directory not found: {prompts_dir}')

    created = 0
    updated = 0
    prompts_map = {}

    with app.app_context():
        if init_sheets:
            setup_service.initialize_sheets()

        by_title = {p.title: p for p in prompt_service.read_prompts()}

        for entry in load_seed_entries(prompts_dir):
            title = str(entry.get("title") or "").strip()
            content = entry.get("content")
            if not title or not isinstance(content, str) or not content.strip():
                continue
            try:
                existing = by_title.get(title)
                if existing is None:
                    saved = prompt_service.create_prompt(entry, refresh=False)
                    created += 1
                elif _differs(existing, entry):
                    changes = {k: entry[k] for k in prompt_service.UPDATABLE_FIELDS if k in entry}
                    saved = prompt_service.update_prompt(existing.id, changes, refresh=False)
                    updated += 1
                else:
                    saved = existing
            except prompt_service.BadRequestError as e:
                log.warning("seed.entry.skipped", title=title, error=str(e))
                continue
            by_title[title] = saved
            prompts_map[title] = saved.content

        if created or updated:
            prompt_service.refresh_indexes()

    log.info("seed.finished", created=created, updated=updated, path=str(prompts_dir))
    return {"created": created, "updated": updated, "prompts": prompts_map}

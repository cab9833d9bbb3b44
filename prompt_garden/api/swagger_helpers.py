"""Helpers to cut down repeated Flasgger declarations on the prompt endpoints.

View functions are tagged with decorators; `apply_swagger_extras(app)` runs
once after the blueprints are registered and rewrites each tagged view's
YAML docstring before Flasgger builds the spec.
"""
import json
import textwrap
from pathlib import Path
from typing import Callable, Optional

import yaml

MARKER = "# __swagger_extras_injected__"

PAGINATION_PARAMS = yaml.safe_load("""
- in: query
  name: page
  type: integer
  description: Page number (1-based)
- in: query
  name: pageSize
  type: integer
  description: Number of items per page (max 100)
- in: query
  name: sortBy
  type: string
  enum: [createdAt, updatedAt, title]
  description: Field to sort by
- in: query
  name: sortOrder
  type: string
  enum: [asc, desc]
  description: Sort order
""")

PROMPT_FILTER_PARAMS = yaml.safe_load("""
- in: query
  name: tag
  type: string
  description: Only prompts carrying this tag or category (case-insensitive)
- in: query
  name: q
  type: string
  description: Case-insensitive search over title and content
""")


def with_pagination(func: Callable) -> Callable:
    """Mark a view as accepting page/pageSize/sortBy/sortOrder."""
    setattr(func, "__add_pagination__", True)
    return func


def with_prompt_filters(func: Callable) -> Callable:
    """Mark a view as accepting the tag/q prompt filters."""
    setattr(func, "__add_prompt_filters__", True)
    return func


def with_example_file(path: str):
    """Attach a JSON example file (relative to the app root) to a view's request body."""

    def _decorator(func: Callable) -> Callable:
        setattr(func, "__swagger_example_file__", path)
        return func

    return _decorator


def _get_attr_from_wrapped(obj, name):
    """Look up `name` on obj or along its __wrapped__ chain."""
    cur = obj
    for _ in range(10):
        if cur is None:
            return None
        if hasattr(cur, name):
            return getattr(cur, name)
        cur = getattr(cur, "__wrapped__", None)
    return None


def _load_example(app, example_file: str) -> Optional[dict]:
    p = Path(example_file)
    candidates = [p] if p.is_absolute() else [
        Path(app.root_path) / example_file,
        Path(app.root_path) / "api" / "examples" / p.name,
    ]
    for cand in candidates:
        if cand.exists():
            with open(cand, "r", encoding="utf-8") as fh:
                return json.load(fh)
    app.logger.debug("swagger example file not found: %s", example_file)
    return None


def _split_doc(doc: str):
    """Return (summary text, parsed YAML mapping) for a Flasgger docstring."""
    if "---" not in doc:
        return doc, {}
    sep = doc.find("---")
    parsed = yaml.safe_load(textwrap.dedent(doc[sep + 3:])) or {}
    return doc[:sep], parsed if isinstance(parsed, dict) else {}


def _merge_params(existing, extra):
    seen = set()
    merged = []
    for p in list(extra) + list(existing):
        key = (p.get("in"), p.get("name"))
        if key in seen:
            continue
        seen.add(key)
        merged.append(p)
    return merged


def _attach_body_example(spec: dict, example: dict):
    params = spec.setdefault("parameters", [])
    body = next((p for p in params if p.get("in") == "body"), None)
    if body is None:
        body = {"in": "body", "name": "body", "required": True, "schema": {"type": "object"}}
        params.append(body)
    body.setdefault("schema", {"type": "object"})["example"] = example


def apply_swagger_extras(app):
    """Inject pagination/filter params and body examples into tagged views.

    Idempotent: views already carrying the marker are skipped.
    """
    for endpoint, view in list(app.view_functions.items()):
        if endpoint.startswith("static"):
            continue

        doc = view.__doc__ or ""
        if MARKER in doc:
            continue

        has_pagination = bool(_get_attr_from_wrapped(view, "__add_pagination__"))
        has_filters = bool(_get_attr_from_wrapped(view, "__add_prompt_filters__"))
        example_file = _get_attr_from_wrapped(view, "__swagger_example_file__")
        if not (has_pagination or has_filters or example_file):
            continue

        try:
            summary, spec = _split_doc(doc)
        except yaml.YAMLError:
            app.logger.warning("swagger docstring for %s is not valid YAML; left as is", endpoint)
            continue

        extra = []
        if has_filters:
            extra += PROMPT_FILTER_PARAMS
        if has_pagination:
            extra += PAGINATION_PARAMS
        if extra:
            spec["parameters"] = _merge_params(spec.get("parameters", []), extra)

        if example_file:
            example = _load_example(app, example_file)
            if example is not None:
                _attach_body_example(spec, example)

        view.__doc__ = summary.rstrip() + "\n\n---\n" + MARKER + "\n" + yaml.safe_dump(spec, sort_keys=False)

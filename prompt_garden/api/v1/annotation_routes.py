from flask import Blueprint, request

from prompt_garden.api.responses import _ok, _err
from prompt_garden.api.swagger_helpers import with_example_file
from prompt_garden.services import annotation_parser

annotations_bp = Blueprint("annotations", __name__)


def _content_from(payload):
    if not isinstance(payload, dict):
        return None
    content = payload.get("content")
    return content if isinstance(content, str) else None


@annotations_bp.route("/annotations/parse", methods=["POST"])
@with_example_file("api/examples/annotation_example.json")
def parse_annotations():
    """Parse unsaved prompt text, e.g. for a live editor preview.
    ---
    tags:
      - Annotations
    responses:
      200:
        description: "{segments, followups, variables, cleanContent}"
      400:
        description: content missing
    """
    content = _content_from(request.get_json(silent=True))
    if content is None:
        return _err("'content' must be a string", 400)
    return _ok(annotation_parser.analyze_content(content))


@annotations_bp.route("/annotations/fill", methods=["POST"])
def fill_variables():
    """Substitute [VARIABLE] placeholders with the given values.
    ---
    tags:
      - Annotations
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          example:
            content: "Write about [TOPIC] for [audience]."
            values:
              TOPIC: tide pools
              AUDIENCE: children
    responses:
      200:
        description: "{content, missing}"
      400:
        description: Bad request
    """
    payload = request.get_json(silent=True)
    content = _content_from(payload)
    if content is None:
        return _err("'content' must be a string", 400)
    values = payload.get("values") or {}
    if not isinstance(values, dict):
        return _err("'values' must be an object", 400)

    filled = annotation_parser.fill_variables(content, values)
    return _ok({"content": filled, "missing": annotation_parser.extract_variables(filled)})

from flask import request, Blueprint, current_app

from prompt_garden.api.pagination import paginate_items, has_pagination_args
from prompt_garden.api.responses import _ok, _err
from prompt_garden.api.swagger_helpers import with_example_file, with_pagination, with_prompt_filters
from prompt_garden.services import annotation_parser, prompt_service
from prompt_garden.services.prompt_service import BadRequestError, NotFoundError

prompts_bp = Blueprint("prompts", __name__)

NOT_FOUND = "Prompt not found"
SORT_FIELDS = {"createdAt": "created_at", "updatedAt": "updated_at", "title": "title"}


@prompts_bp.route("/prompts", methods=["GET"])
@with_pagination
@with_prompt_filters
def get_prompts():
    """List prompts.
    Filters by `tag` (tags or category) or searches with `q`. Without
    pagination params the full list is returned in sheet order.
    ---
    tags:
      - Prompts
    responses:
      200:
        description: Array of prompts, or {meta, data} when paginated.
    """
    args = request.args or {}
    try:
        prompts = prompt_service.list_prompts(tag=args.get("tag"), query=args.get("q"))
        if not has_pagination_args(args):
            return _ok([p.to_dict() for p in prompts])
        return _ok(paginate_items(prompts, args, default_sort="updatedAt", sort_fields=SORT_FIELDS))
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts", methods=["POST"])
@with_example_file("api/examples/prompt_example.json")
def create_prompt():
    """Create a new prompt.
    Accepts JSON: {content: str, title?: str, tags?: [str], category?: str}
    ---
    tags:
      - Prompts
    responses:
      201:
        description: The stored prompt.
      400:
        description: Missing content or malformed fields.
    """
    payload = request.get_json(silent=True)
    try:
        prompt = prompt_service.create_prompt(payload if payload is not None else {})
        return _ok(prompt.to_dict(), 201)
    except BadRequestError as e:
        return _err(e, 400)
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts/<string:prompt_id>", methods=["GET"])
def get_prompt(prompt_id):
    """Get a prompt by id.
    ---
    tags:
      - Prompts
    responses:
      200:
        description: Prompt found
      404:
        description: Prompt not found
    """
    try:
        return _ok(prompt_service.get_prompt_by_id(prompt_id).to_dict())
    except NotFoundError:
        return _err(NOT_FOUND, 404)
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts/<string:prompt_id>", methods=["PUT"])
@with_example_file("api/examples/prompt_example.json")
def update_prompt(prompt_id):
    """Update a prompt. Only the fields present in the body change.
    ---
    tags:
      - Prompts
    responses:
      200:
        description: Prompt updated
      400:
        description: Bad request
      404:
        description: Prompt not found
    """
    payload = request.get_json(silent=True)
    try:
        updated = prompt_service.update_prompt(prompt_id, payload or {})
        return _ok(updated.to_dict())
    except NotFoundError:
        return _err(NOT_FOUND, 404)
    except BadRequestError as e:
        return _err(e, 400)
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts/<string:prompt_id>", methods=["DELETE"])
def delete_prompt(prompt_id):
    """Delete a prompt.
    ---
    tags:
      - Prompts
    responses:
      200:
        description: Deleted
      404:
        description: Prompt not found
    """
    try:
        deleted = prompt_service.delete_prompt(prompt_id)
        return _ok({"id": deleted.id, "message": "Prompt deleted successfully"})
    except NotFoundError:
        return _err(NOT_FOUND, 404)
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts/<string:prompt_id>/sections", methods=["GET"])
def get_prompt_sections(prompt_id):
    """Parsed annotation segments, variables and clipboard text of a prompt.
    ---
    tags:
      - Prompts
    responses:
      200:
        description: "{segments, followups, variables, cleanContent}"
      404:
        description: Prompt not found
    """
    try:
        prompt = prompt_service.get_prompt_by_id(prompt_id)
    except NotFoundError:
        return _err(NOT_FOUND, 404)
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)
    return _ok({"id": prompt.id, **annotation_parser.analyze_content(prompt.content)})


@prompts_bp.route("/prompts/<string:prompt_id>/remix", methods=["GET"])
def get_prompt_remix(prompt_id):
    """Prefill values for a new prompt based on this one.
    ---
    tags:
      - Prompts
    responses:
      200:
        description: "{title, content, tags}"
      404:
        description: Prompt not found
    """
    try:
        return _ok(prompt_service.build_remix(prompt_id))
    except NotFoundError:
        return _err(NOT_FOUND, 404)
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)


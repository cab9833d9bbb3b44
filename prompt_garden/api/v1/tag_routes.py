from flask import Blueprint, current_app

from prompt_garden.api.responses import _ok, _err
from prompt_garden.services import tag_service

tags_bp = Blueprint("tags", __name__)


@tags_bp.route("/tags", methods=["GET"])
def get_tags():
    """All tags with usage counts.
    ---
    tags:
      - Tags
    responses:
      200:
        description: "Array of {name, count, isCategory}"
    """
    try:
        return _ok([t.to_dict() for t in tag_service.get_all_tags()])
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)


@tags_bp.route("/categories", methods=["GET"])
def get_categories():
    """Names of the tags used as a prompt category.
    ---
    tags:
      - Tags
    responses:
      200:
        description: Array of category names
    """
    try:
        return _ok(tag_service.get_categories())
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)

from flask import Blueprint, current_app

from prompt_garden.api.responses import _ok, _err
from prompt_garden.services import setup_service

setup_bp = Blueprint("setup", __name__)


@setup_bp.route("/setup", methods=["GET"])
def setup_sheets():
    """Create the backing sheets and header rows if they are missing.
    Safe to call any number of times.
    ---
    tags:
      - Setup
    responses:
      200:
        description: "{created, existing, headers} sheet titles"
      500:
        description: Spreadsheet not reachable or credentials missing
    """
    try:
        result = setup_service.initialize_sheets()
        return _ok({"message": "Google Sheets database initialized successfully", **result})
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)

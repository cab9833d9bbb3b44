from flask import Blueprint

from .prompt_routes import prompts_bp
from .tag_routes import tags_bp
from .setup_routes import setup_bp
from .annotation_routes import annotations_bp

# Master blueprint for the v1 API
api_v1 = Blueprint('api_v1', __name__)

api_v1.register_blueprint(prompts_bp)
api_v1.register_blueprint(tags_bp)
api_v1.register_blueprint(setup_bp)
api_v1.register_blueprint(annotations_bp)

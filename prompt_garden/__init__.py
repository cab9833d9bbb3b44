import os

from flask import Flask
from flask_cors import CORS
from flasgger import Flasgger

from config import config
from .extensions import cache, sheets
from .logging_config import configure_logging, init_request_logging


def create_app(config_name=None):
    """
    Application factory function.
    """
    if config_name is None:
        config_name = os.getenv('FLASK_CONFIG', 'default')

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    configure_logging(
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        is_debug=app.config.get("DEBUG", False)
    )
    init_request_logging(app)

    cache.init_app(app)
    sheets.init_app(app)

    with app.app_context():
        from .api.v1 import api_v1
        app.register_blueprint(api_v1, url_prefix='/api/v1')

        # Docstrings must be rewritten before Flasgger reads them
        from .api.swagger_helpers import apply_swagger_extras
        apply_swagger_extras(app)

    Flasgger(app)

    CORS(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    @app.after_request
    def set_security_headers(response):
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

    return app

"""
JSON API Blueprints

- propositions: highlights, engagement tracking, stance summaries
- admin: scheduler-triggered sync

All endpoints return JSON with the standardized error format.
"""
from flask_cors import CORS

from pauta.api.errors import register_error_handlers
from pauta.api.propositions import propositions_bp
from pauta.api.admin import admin_api_bp


def init_api(app):
    """
    Register the API blueprints under /api with CORS and JSON error handlers.

    Args:
        app: Flask application instance
    """
    # Blueprint objects are module singletons; guard against re-registering
    # handlers when create_app() is called multiple times in tests.
    for blueprint in (propositions_bp, admin_api_bp):
        if not getattr(blueprint, "_pauta_error_handlers_registered", False):
            register_error_handlers(blueprint)
            blueprint._pauta_error_handlers_registered = True
        app.register_blueprint(blueprint, url_prefix='/api')

    CORS(
        app,
        resources={
            r"/api/propositions/*": {
                "origins": "*",
                "methods": ['GET', 'POST', 'OPTIONS'],
                "allow_headers": ['Content-Type'],
                "max_age": 86400,
            }
        },
        supports_credentials=False,
    )

    app.logger.info("API blueprints registered")


__all__ = ['init_api', 'propositions_bp', 'admin_api_bp']

"""Application factory and app-wide configuration."""

from typing import Optional
from uuid import uuid4

from flask import Flask, request
from flask_cors import CORS

from retirement_calc.app.api.routes import api_bp
from retirement_calc.config import Settings, load_settings
from retirement_calc.utils.logging import get_logger, set_request_id, setup_logging

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings

    CORS(
        app,
        resources={r"/api/*": {"origins": list(settings.cors_origins)}},
        supports_credentials=True,
    )

    @app.before_request
    def _bind_request_id() -> None:
        set_request_id(request.headers.get("X-Request-ID") or uuid4().hex[:12])

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info("app ready env=%s origins=%d", settings.env, len(settings.cors_origins))
    return app

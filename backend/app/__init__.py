"""Application factory and app-wide configuration."""

import logging
import sys
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from backend.app.api.routes import api_bp
from backend.app.config import DEFAULTS


def configure_logging(level: str = "INFO") -> None:
    """Send application logs to stdout once; repeated factory calls reuse the handler."""
    lvl = getattr(logging, str(level).upper(), logging.INFO)
    root = logging.getLogger("backend")
    root.setLevel(lvl)

    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s")
        )
        root.addHandler(handler)


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance."""
    app = Flask(__name__)
    app.config.from_mapping(DEFAULTS)
    app.config.from_prefixed_env("CALC")
    if overrides:
        app.config.from_mapping(overrides)

    configure_logging(app.config["LOG_LEVEL"])

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app

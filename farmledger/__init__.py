# farmledger/__init__.py
from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Any, Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import validate_config
from .errors import register_error_handlers
from .extensions import db, jwt, mail, migrate
from .routes import BLUEPRINTS
from .security import register_jwt_callbacks


# --- Config ------------------------------------------------------------------
def _get_allowed_origins(app: Flask) -> list[str]:
    """Allowed CORS origins: local dev servers plus CORS_ALLOWED_ORIGINS."""
    default = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    # Support comma-separated list in env
    extra = app.config.get("CORS_ALLOWED_ORIGINS") or ""
    extra_list = [o.strip() for o in extra.split(",") if o.strip()]
    return sorted(set(default + extra_list))


LOG_FORMAT = '{"ts":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","msg":"%(message)s"}'


def _configure_logging(app: Flask) -> None:
    """One JSON line per log record on stderr, filtered at LOG_LEVEL."""
    level = str(app.config.get("LOG_LEVEL") or "INFO").upper()
    root = logging.getLogger()
    root.setLevel(level)
    app.logger.setLevel(level)

    # create_app runs once per test; attach the handler only once
    if any(getattr(h, "farmledger", False) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.farmledger = True
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    root.addHandler(handler)


def _configure_cors(app: Flask) -> None:
    origins = _get_allowed_origins(app)
    CORS(
        app,
        resources={r"/dashboard.*": {"origins": origins}, r"/auth/.*": {"origins": origins}},
        supports_credentials=True,
        methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-CSRF-TOKEN", "X-Requested-With"],
        max_age=86400,
    )


def _configure_proxy(app: Flask) -> None:
    """Trust one proxy hop, so confirmation links and cookies use the public host and scheme."""
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)  # type: ignore


def _init_extensions(app: Flask) -> None:
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)
    register_jwt_callbacks(jwt)


def _register_blueprints(app: Flask) -> None:
    for module_path, url_prefix in BLUEPRINTS:
        mod = __import__(module_path, fromlist=["bp"])
        app.register_blueprint(mod.bp, url_prefix=url_prefix)
        app.logger.debug("Registered blueprint %s at %s", module_path, url_prefix or "/")


def _load_config(app: Flask, config_object: Optional[str | Any]) -> None:
    if config_object is None:
        config_object = os.getenv("CONFIG_CLASS", "farmledger.config.Config")

    if isinstance(config_object, str):
        # load "package.ClassName"
        module, _, cls = config_object.rpartition(".")
        conf = getattr(__import__(module, fromlist=[cls]), cls)
        app.config.from_object(conf)
    else:
        app.config.from_object(config_object)
    validate_config(app.config)


# --- Application Factory ------------------------------------------------------
def create_app(config_object: Optional[str | Any] = None) -> Flask:
    """
    Standard Flask application factory.

    `config_object` may be:
      - a config class
      - dotted path to a config class (e.g., "farmledger.config.DevelopmentConfig")
      - None (then CONFIG_CLASS from the environment, or farmledger.config.Config)
    """
    app = Flask(__name__, instance_relative_config=True)
    _load_config(app, config_object)

    _configure_logging(app)
    _configure_proxy(app)
    _configure_cors(app)

    _init_extensions(app)
    _register_blueprints(app)
    register_error_handlers(app)

    from .cli import register_cli
    register_cli(app)

    @app.get("/health")
    def health():
        return jsonify(
            {
                "status": "ok",
                "time": datetime.utcnow().isoformat() + "Z",
                "service": "farmledger",
            }
        ), 200

    return app

# rentledger_backend/__init__.py
from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Any, Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from .errors import register_error_handlers
from .extensions import db, migrate


# --- Config ------------------------------------------------------------------
def _get_allowed_origins(app: Flask) -> list[str]:
    """Allowed CORS origins from config; includes the local dev servers."""
    default = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    extra = app.config.get("CORS_ALLOWED_ORIGINS", "")
    extra_list = [o.strip() for o in extra.split(",") if o.strip()]
    return sorted(set(default + extra_list))


def _configure_logging(app: Flask) -> None:
    """JSON logs to stdout."""
    level = app.config.get("LOG_LEVEL", "INFO")
    app.logger.setLevel(level)
    root = logging.getLogger()
    root.setLevel(level)

    # avoid duplicate handlers in reloaders
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='{"ts":"%(asctime)s","level":"%(levelname)s","msg":"%(message)s","name":"%(name)s"}',
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)


def _configure_cors(app: Flask) -> None:
    CORS(
        app,
        resources={r"/api/*": {"origins": _get_allowed_origins(app)}},
        methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type", "X-Requested-With"],
        expose_headers=["Content-Type"],
        max_age=86400,
    )


def _configure_proxy(app: Flask) -> None:
    """Respect X-Forwarded-* from the load balancer."""
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)  # type: ignore


def _load_config(app: Flask, config_object: Optional[str | Any]) -> None:
    if isinstance(config_object, str):
        # load "package.module.ClassName"
        module, _, cls = config_object.rpartition(".")
        config_object = getattr(__import__(module, fromlist=[cls]), cls)
    app.config.from_object(config_object)


def _init_services(app: Flask, clock) -> None:
    from .services.tenant_service import build_tenant_service

    app.extensions["tenant_service"] = build_tenant_service(db.session, clock=clock)


# --- Application Factory ------------------------------------------------------
def create_app(config_object: Optional[str | Any] = None, clock=None) -> Flask:
    """
    Standard Flask application factory.

    `config_object` may be:
      - a config object
      - dotted path to a config class (e.g., "rentledger_backend.config.TestingConfig")
      - None (then the CONFIG_CLASS env var, defaulting to rentledger_backend.config.Config)

    `clock` provides "now" to the tenant service; wall-clock UTC when omitted.
    """
    app = Flask(__name__)

    if config_object is None:
        config_object = os.getenv("CONFIG_CLASS", "rentledger_backend.config.Config")
    _load_config(app, config_object)
    app.config.setdefault("API_PREFIX", "/api")

    # Core middleware/logging/CORS
    _configure_logging(app)
    _configure_proxy(app)
    _configure_cors(app)

    # Init extensions, services & blueprints
    db.init_app(app)
    migrate.init_app(app, db)
    _init_services(app, clock)

    from .routes import tenants_bp

    app.register_blueprint(tenants_bp, url_prefix=app.config["API_PREFIX"])
    register_error_handlers(app)

    # --------- Health route ----------
    @app.get(app.config["API_PREFIX"] + "/health")
    def health():
        return jsonify(
            {
                "status": "ok",
                "time": datetime.now(timezone.utc).isoformat(),
                "service": "rentledger-backend",
            }
        ), 200

    return app

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from blog_backend.infrastructure.container import Container
from blog_backend.infrastructure.db import init_db
from blog_backend.shared.config import AppConfig, load_config
from blog_backend.shared.config.settings import INSECURE_SECRET_KEYS
from blog_backend.shared.logging import logger, setup_logging
from blog_backend.shared.middleware.error_handler import configure_error_handling
from blog_backend.shared.middleware.request_logger import configure_request_logging
from blog_backend.shared.middleware.security_headers import configure_security_headers


def create_app(config: AppConfig | None = None, *, container: Container | None = None) -> Flask:
    config = config or (container.config if container else load_config())
    container = container or Container(config)

    setup_logging(
        "DEBUG" if config.debug_logging else config.log_level,
        log_file=config.log_file,
    )
    init_db(container.engine)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.json.sort_keys = False  # type: ignore[attr-defined]
    app.extensions["container"] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    configure_security_headers(app, enable_hsts=config.security.enable_hsts)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.posts_controller.as_blueprint())

    if config.secret_key in INSECURE_SECRET_KEYS:
        logger.warning("Using the built-in development SECRET_KEY; never run like this in production")

    logger.info(f"Flask app initialized (env={config.app_env})")
    return app

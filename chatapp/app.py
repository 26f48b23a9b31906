# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from flask import Flask, Response
from flask_cors import CORS
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from chatapp.infrastructure.auth import install_token_service
from chatapp.infrastructure.container import Container
from chatapp.infrastructure.db import SessionLocal, init_db
from chatapp.shared.config import AppConfig, load_config
from chatapp.shared.logging import logger, setup_logging
from chatapp.shared.middleware.error_handler import configure_error_handling
from chatapp.shared.middleware.request_logger import configure_request_logging


def _configure_security_headers(app: Flask, config: AppConfig) -> None:
    @app.after_request
    def _add_security_headers(resp: Response) -> Response:
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )
        return resp


def create_app(
    config: AppConfig | None = None,
    *,
    engine: Engine | None = None,
    session_factory: Callable[[], Session] | None = None,
) -> Flask:
    config = config or load_config()
    setup_logging(config.log_level, debug_mode=config.debug_logging)
    init_db(engine)

    container = Container(config, session_factory or SessionLocal)

    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)
    _configure_security_headers(app, config)

    CORS(app, resources={r"/api/*": {"origins": config.security.allowed_origins}})

    # Fails startup on a bad TOKEN_KEY unless the ephemeral fallback is enabled.
    install_token_service(app, container.token_service)

    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.users_controller.as_blueprint())
    app.register_blueprint(container.chats_controller.as_blueprint())
    app.register_blueprint(container.messages_controller.as_blueprint())
    app.extensions["chatapp.container"] = container

    logger.info(f"Flask app initialized (env={config.app_env})")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)

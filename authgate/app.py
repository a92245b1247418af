# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from authgate.infrastructure.container import Container
from authgate.shared.config import AppConfig, load_config
from authgate.shared.errors import register_error_handler
from authgate.shared.logging import logger, setup_logging
from authgate.shared.middleware import configure_request_logging, configure_security_headers


def create_app(config: AppConfig | None = None) -> Flask:
    config = config or load_config()
    setup_logging(config.log_level, log_file=config.log_file or None)

    container = Container(config)
    # A missing signing key or unusable hashing target aborts startup.
    _ = container.token_service
    _ = container.password_hasher
    container.database.init_schema()

    app = Flask(__name__)
    app.extensions["authgate"] = container

    register_error_handler(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    configure_security_headers(app, config.security)

    app.register_blueprint(container.health_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())

    logger.info(f"authgate started (env={config.app_env}, issuer={config.security.token_issuer})")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000)

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask
from flask_cors import CORS

from backend.auth import install_token_service
from backend.infrastructure.container import Container, container
from backend.infrastructure.db import init_db
from backend.shared.config import load_config
from backend.shared.logging import logger, setup_logging
from backend.shared.middleware.error_handler import configure_error_handling
from backend.shared.middleware.request_logger import configure_request_logging

_config = load_config()


def create_app(app_container: Container | None = None) -> Flask:
    app_container = app_container or container
    setup_logging(
        _config.log_level,
        debug_mode=_config.debug_logging,
        log_file=_config.log_file,
        rotation=_config.log_rotation,
        retention=_config.log_retention,
    )
    init_db()

    app = Flask(__name__)
    # Multipart overhead on top of the icon itself.
    app.config["MAX_CONTENT_LENGTH"] = _config.blob_store.max_upload_bytes + 64 * 1024
    configure_error_handling(app)
    configure_request_logging(app)
    install_token_service(app, app_container.token_service)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": _config.security.allowed_origins}},
        "allow_headers": ["Authorization", "Content-Type"],
    }
    CORS(app, **cors_kwargs)

    app.register_blueprint(app_container.misc_controller.as_blueprint())
    app.register_blueprint(app_container.auth_controller.as_blueprint())
    app.register_blueprint(app_container.profile_controller.as_blueprint())
    app.register_blueprint(app_container.reviews_controller.as_blueprint())
    app.register_blueprint(app_container.restaurants_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        if _config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True, threaded=True)

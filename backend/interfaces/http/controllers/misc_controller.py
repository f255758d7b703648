# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pathlib import Path

from flask import Blueprint, jsonify, send_from_directory

from backend.infrastructure.health import check_database
from backend.shared.logging import logger


class MiscController:
    def __init__(self, *, media_root: Path) -> None:
        self._media_root = media_root

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        bp.add_url_rule("/media/<path:key>", view_func=self.media, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            status["database_ms"] = round(check_database(), 1)
            status["database"] = "ok"
        except Exception as exc:  # pragma: no cover
            logger.error(f"health: database check failed: {type(exc).__name__}")
            status["ok"] = False
            status["database"] = "error"
            return jsonify(status), 503
        return jsonify(status)

    def media(self, key: str):
        return send_from_directory(self._media_root.resolve(), key)

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from authgate.shared.logging import logger

from .base import AppError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def register_error_handler(app: Flask, *, debug_mode: bool = False) -> None:
    """Render ``AppError`` as JSON and hide everything else behind a 500."""

    @app.errorhandler(AppError)
    def _on_app_error(exc: AppError):
        where = f"{request.method} {request.path}"
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(f"{exc.code} on {where}")
        else:
            logger.info(f"{exc.code} ({int(exc.status)}) on {where}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _on_http_exception(exc: HTTPException):
        return jsonify({"error": (exc.name or "http_error").lower().replace(" ", "_")}), exc.code

    @app.errorhandler(Exception)
    def _on_unexpected(exc: Exception):
        where = f"{request.method} {request.path} user={getattr(g, 'user_id', None)}"
        if debug_mode:
            logger.exception(f"Unhandled {type(exc).__name__} on {where}")
        else:
            logger.error(f"Unhandled {type(exc).__name__} on {where}")
        return jsonify({"error": "internal_error"}), HTTPStatus.INTERNAL_SERVER_ERROR

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request correlation ids and access logging."""

from __future__ import annotations

import re
import secrets
import time

from flask import Flask, Response, g, request

from authgate.shared.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"

# Client-supplied ids end up in every log line of the request.
_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,64}")


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _incoming_request_id() -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _REQUEST_ID_RE.fullmatch(supplied):
        return supplied
    return secrets.token_hex(8)


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    @app.before_request
    def _start() -> None:
        g.request_id = _incoming_request_id()
        g.request_started = time.perf_counter()
        set_correlation_id(g.request_id)
        if debug_mode:
            # Header values are left out; Cookie carries the session token.
            logger.debug(
                f"-> {request.method} {request.path} from {_client_ip()} "
                f"headers={sorted(request.headers.keys())} body_size={request.content_length or 0}"
            )

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        response.headers[REQUEST_ID_HEADER] = g.get("request_id", "-")
        logger.info(
            f"{request.method} {request.path} {response.status_code} "
            f"{elapsed_ms:.1f}ms user={g.get('user_id')} ip={_client_ip()}"
        )
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"Request aborted: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response

from authgate.shared.config import SecurityConfig

BASE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}
HSTS_VALUE = "max-age=31536000; includeSubDomains"


def configure_security_headers(app: Flask, config: SecurityConfig) -> None:
    headers = dict(BASE_HEADERS)
    if config.enable_hsts:
        headers["Strict-Transport-Security"] = HSTS_VALUE

    @app.after_request
    def _apply_security_headers(response: Response) -> Response:
        for name, value in headers.items():
            response.headers.setdefault(name, value)
        return response


__all__ = ["BASE_HEADERS", "HSTS_VALUE", "configure_security_headers"]

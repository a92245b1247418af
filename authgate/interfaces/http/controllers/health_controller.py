# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from dataclasses import asdict

from flask import Blueprint, jsonify

from authgate.infrastructure.db import Database
from authgate.infrastructure.health import HEALTHY, check_database, overall_status


class HealthController:
    def __init__(self, *, database: Database) -> None:
        self._database = database

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("health", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self):
        started = time.perf_counter()
        database = check_database(self._database)
        status = overall_status(database.status == HEALTHY)
        payload = {
            "status": status,
            "duration_ms": (time.perf_counter() - started) * 1000.0,
            "info": [asdict(database)],
        }
        return jsonify(payload), 200 if status == HEALTHY else 503

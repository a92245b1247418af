# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from authgate.infrastructure.db import Database
from authgate.shared.logging import logger

HEALTHY = "Healthy"
DEGRADED = "Degraded"
UNHEALTHY = "Unhealthy"


@dataclass(slots=True, frozen=True)
class HealthCheckInfo:
    key: str
    status: str
    description: str
    duration_ms: float


def overall_status(required_ok: bool, optional_ok: bool = True) -> str:
    if not required_ok:
        return UNHEALTHY
    if not optional_ok:
        return DEGRADED
    return HEALTHY


def check_database(database: Database) -> HealthCheckInfo:
    started = time.perf_counter()
    try:
        database.ping()
        healthy = True
    except SQLAlchemyError as exc:
        logger.warning(f"health: database ping failed: {type(exc).__name__}")
        healthy = False
    status = overall_status(healthy)
    return HealthCheckInfo(
        key="Database",
        status=status,
        description=status,
        duration_ms=(time.perf_counter() - started) * 1000.0,
    )


__all__ = ["HealthCheckInfo", "check_database", "overall_status"]

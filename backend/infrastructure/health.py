# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from sqlalchemy import text

from backend.infrastructure.db import ENGINE


def check_database() -> float:
    """Run a trivial query; return the round trip in milliseconds."""

    t0 = perf_counter()
    with ENGINE.connect() as connection:
        connection.execute(text("SELECT 1"))
    return (perf_counter() - t0) * 1000


__all__ = ["check_database"]

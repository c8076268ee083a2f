from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import pytz

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_float
from .model import LocationSample, RawEvent
from .repository import ClockEntryRepository, LocationLogRepository

_CLOCK_COLUMNS = """
    id, user_id, company_id, project_id, type, timestamp, entry_method,
    clock_in_latitude, clock_in_longitude, clock_in_accuracy,
    clock_out_latitude, clock_out_longitude, clock_out_accuracy,
    edited_by, edit_reason
"""


def _naive_utc(value: datetime) -> datetime:
    # Connection runs with time_zone=+00:00; DATETIME params must be naive UTC.
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.utc).replace(tzinfo=None)


def _row_to_event(r: Dict[str, Any]) -> RawEvent:
    return RawEvent(
        id=r["id"],
        user_id=r["user_id"],
        company_id=r.get("company_id"),
        project_id=r.get("project_id"),
        type=r["type"],
        timestamp=r["timestamp"],
        entry_method=r.get("entry_method"),
        clock_in_latitude=to_float(r.get("clock_in_latitude")),
        clock_in_longitude=to_float(r.get("clock_in_longitude")),
        clock_in_accuracy=to_float(r.get("clock_in_accuracy")),
        clock_out_latitude=to_float(r.get("clock_out_latitude")),
        clock_out_longitude=to_float(r.get("clock_out_longitude")),
        clock_out_accuracy=to_float(r.get("clock_out_accuracy")),
        edited_by=r.get("edited_by"),
        edit_reason=r.get("edit_reason"),
    )


class MySQLClockEntryRepository(ClockEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: Any, *, start: datetime, end: datetime) -> Sequence[RawEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_CLOCK_COLUMNS}
                FROM clock_entries
                WHERE user_id=%s AND timestamp >= %s AND timestamp < %s
                ORDER BY timestamp ASC, id ASC
                """,
                (user_id, _naive_utc(start), _naive_utc(end)),
            )
            return [_row_to_event(r) for r in fetchall(cur)]

    def list_for_company(
        self,
        company_id: Any,
        *,
        start: datetime,
        end: datetime,
        user_id: Optional[Any] = None,
    ) -> Sequence[RawEvent]:
        where = ["company_id=%s", "timestamp >= %s", "timestamp < %s"]
        params: list[Any] = [company_id, _naive_utc(start), _naive_utc(end)]
        if user_id is not None:
            where.append("user_id=%s")
            params.append(user_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_CLOCK_COLUMNS}
                FROM clock_entries
                WHERE {' AND '.join(where)}
                ORDER BY user_id ASC, timestamp ASC, id ASC
                """,
                tuple(params),
            )
            return [_row_to_event(r) for r in fetchall(cur)]


class MySQLLocationLogRepository(LocationLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: Any, *, start: datetime, end: datetime) -> Sequence[LocationSample]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT timestamp, is_moving, project_id
                FROM location_logs
                WHERE user_id=%s AND timestamp >= %s AND timestamp <= %s
                ORDER BY timestamp ASC
                """,
                (user_id, _naive_utc(start), _naive_utc(end)),
            )
            return [
                LocationSample(
                    timestamp=r["timestamp"],
                    is_moving=bool(r["is_moving"]),
                    project_id=r.get("project_id"),
                )
                for r in fetchall(cur)
            ]

from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import MessageChannel, MessageStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import MessageLog
from .repository import MessageLogRepository


class MySQLMessageLogRepository(MessageLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, log: MessageLog) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO message_logs(id, customer_id, month, year, channel, status, timestamp)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (log.id, log.customer_id, log.month, log.year, log.channel.value, log.status.value, log.timestamp),
            )

    def find(self, *, month: int, year: int, customer_id: Optional[str] = None) -> Sequence[MessageLog]:
        sql = """
            SELECT id, customer_id, month, year, channel, status, timestamp
            FROM message_logs
            WHERE month=%s AND year=%s
        """
        params: list[object] = [int(month), int(year)]
        if customer_id is not None:
            sql += " AND customer_id=%s"
            params.append(customer_id)
        sql += " ORDER BY timestamp ASC, id ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                MessageLog(
                    id=r["id"],
                    customer_id=r["customer_id"],
                    month=int(r["month"]),
                    year=int(r["year"]),
                    channel=MessageChannel(r["channel"]),
                    status=MessageStatus(r["status"]),
                    timestamp=r["timestamp"],
                )
                for r in fetchall(cur)
            ]

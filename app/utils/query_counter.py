"""SQL 실행 횟수 측정 유틸리티.

SQL statement counter utility.
Counts the statements a session sends to the database so that loading
strategies can report their round trips (1, 2, or 1 + N).

Usage:
    async with count_statements(db) as counter:
        await db.execute(select(Order))
    counter.count  # -> 1
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncSession


class StatementCounter:
    """세션 커넥션에서 실행된 SQL 문장 수를 집계합니다.

    Accumulates the statements executed on a single connection.

    Attributes:
        count: 실행된 문장 수 (Number of statements executed)
        statements: 실행된 SQL 텍스트 목록 (Executed SQL text, in order)
    """

    def __init__(self, connection: Connection) -> None:
        self._connection: Connection = connection
        self.count: int = 0
        self.statements: list[str] = []

    def __call__(
        self,
        conn: Connection,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        # 같은 엔진을 쓰는 다른 세션의 문장은 무시 — Ignore other sessions on the same engine
        if conn is not self._connection:
            return
        self.count += 1
        self.statements.append(statement)


@asynccontextmanager
async def count_statements(db: AsyncSession) -> AsyncIterator[StatementCounter]:
    """세션이 실행하는 SQL 문장 수를 측정하는 컨텍스트 매니저.

    Count the SQL statements the session executes inside the block.
    The session's connection is checked out up front; the listener is
    attached to its engine and filters on that connection.

    Args:
        db: 비동기 DB 세션 (Async database session)

    Yields:
        StatementCounter: 집계 객체 (Live counter)
    """
    async_conn = await db.connection()
    sync_conn: Connection = async_conn.sync_connection
    sync_engine = sync_conn.engine

    counter = StatementCounter(sync_conn)
    event.listen(sync_engine, "before_cursor_execute", counter)
    try:
        yield counter
    finally:
        event.remove(sync_engine, "before_cursor_execute", counter)

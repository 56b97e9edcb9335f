"""
SQLite 어댑터

WAL 모드로 SQLite 연결 관리.
요청마다 별도 연결을 열어도 동시 접근 가능하도록 설정.

주의: SQLite alias로 time, count 사용 금지 (예약어)
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

logger = logging.getLogger(__name__)


async def create_connection(db_path: Path | str) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드)

    Args:
        db_path: DB 파일 경로

    Returns:
        aiosqlite 연결 객체
    """
    db_path_str = str(db_path)

    # 디렉토리가 없으면 생성
    if db_path_str != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path_str)

    # WAL 모드 설정
    await conn.execute("PRAGMA journal_mode=WAL")

    # 동시 접근 설정
    await conn.execute("PRAGMA busy_timeout=30000")  # 30초 대기

    # 외래 키 제약 활성화
    await conn.execute("PRAGMA foreign_keys=ON")

    logger.debug("SQLite 연결 생성", extra={"db_path": db_path_str})

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    WAL 모드로 SQLite 연결 관리.
    트랜잭션 컨텍스트 매니저 제공.

    Args:
        db_path: DB 파일 경로

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        async with db.transaction():
            await db.execute("INSERT INTO ...")
    ```
    """

    def __init__(self, db_path: Path | str):
        self.db_path = db_path if str(db_path) == ":memory:" else Path(db_path)
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_connected(self) -> bool:
        """연결 상태 확인"""
        return self._conn is not None

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        self._conn = await create_connection(self.db_path)

    async def close(self) -> None:
        """연결 종료"""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.debug("SQLite 연결 종료")

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if parameters:
            return await self._conn.execute(sql, parameters)
        return await self._conn.execute(sql)

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """단일 행 조회"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회"""
        cursor = await self.execute(sql, parameters)
        return list(await cursor.fetchall())

    async def commit(self) -> None:
        """커밋"""
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        """롤백"""
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """트랜잭션 컨텍스트 매니저

        성공 시 자동 커밋, 예외 시 자동 롤백.
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        try:
            yield self._conn
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter) -> None:
    """스키마 초기화 (테이블 생성)

    Args:
        adapter: 연결된 SQLiteAdapter

    주의: 금액은 센트 단위 정수(minor units)로 저장.
    """
    # accounts
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS accounts (
            account_id       TEXT PRIMARY KEY,
            number           TEXT NOT NULL UNIQUE,
            client_id        TEXT NOT NULL,
            account_type     TEXT NOT NULL DEFAULT 'AHORRO',
            currency         TEXT NOT NULL DEFAULT 'BOB',
            alias            TEXT,
            balance_minor    INTEGER NOT NULL DEFAULT 0,
            status           TEXT NOT NULL DEFAULT 'ACTIVA',
            version          INTEGER NOT NULL DEFAULT 1,

            created_at       TEXT NOT NULL,
            updated_at       TEXT NOT NULL
        )
    """)

    # movements (append-only)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS movements (
            seq              INTEGER PRIMARY KEY AUTOINCREMENT,
            movement_id      TEXT NOT NULL UNIQUE,
            account_id       TEXT NOT NULL,
            movement_type    TEXT NOT NULL,
            amount_minor     INTEGER NOT NULL,
            description      TEXT,
            created_at       TEXT NOT NULL,

            FOREIGN KEY (account_id) REFERENCES accounts(account_id)
        )
    """)

    # service_payments
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS service_payments (
            payment_id        TEXT PRIMARY KEY,
            account_id        TEXT NOT NULL,
            service_type      TEXT NOT NULL,
            reference         TEXT NOT NULL,
            amount_minor      INTEGER NOT NULL,
            status            TEXT NOT NULL,
            provider_response TEXT,

            created_at        TEXT NOT NULL,
            updated_at        TEXT NOT NULL
        )
    """)

    # 인덱스 생성
    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_accounts_client
        ON accounts(client_id, created_at)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_movements_account
        ON movements(account_id, seq)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_service_payments_account
        ON service_payments(account_id, created_at)
    """)

    await adapter.commit()

    logger.info("스키마 초기화 완료")

"""
database operations for the quote relay.
Writes are serialized and bounded by a per-call deadline.
"""

import asyncio
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select

from utils import db_logger, config_manager, database_metrics, DatabaseError, ErrorCodes
from .connection import DatabaseManager
from .models import QuoteDB, Quote


class DatabaseOperations:
    """database operations for the quotes table"""

    def __init__(self, db_manager: Optional[DatabaseManager] = None,
                 write_timeout: Optional[float] = None):
        self.db = db_manager or DatabaseManager()
        self.write_timeout = (
            write_timeout if write_timeout is not None
            else config_manager.get_database_config().write_timeout
        )
        # 同一时刻最多一个写入者
        self._write_lock = asyncio.Lock()
        self.db_logger = db_logger

    async def initialize(self):
        """初始化数据库操作"""
        self.db_logger.info("Initializing DatabaseOperations...")
        try:
            await self.db.initialize()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to initialize database: {e}",
                ErrorCodes.DB_CONNECTION_FAILED
            ) from e
        self.db_logger.info("DatabaseOperations initialized successfully")

    async def close(self):
        await self.db.close()

    def get_async_session(self):
        return self.db.get_async_session()

    # === Quote Operations ===

    async def insert_quote(self, quote: Quote, timeout: Optional[float] = None) -> int:
        """追加一条报价记录，返回新行ID

        超时或写入失败时抛出 DatabaseError。
        """
        deadline = timeout if timeout is not None else self.write_timeout
        try:
            row_id = await asyncio.wait_for(self._insert_quote(quote), timeout=deadline)
        except asyncio.TimeoutError as e:
            database_metrics.increment("insert_timeout")
            raise DatabaseError(
                f"Timed out persisting quote after {deadline}s",
                ErrorCodes.DB_TIMEOUT,
                context={"timeout": deadline}
            ) from e
        except SQLAlchemyError as e:
            database_metrics.increment("insert_failure")
            raise DatabaseError(
                f"Failed to persist quote: {e}",
                ErrorCodes.DB_QUERY_FAILED
            ) from e

        database_metrics.increment("insert_success")
        self.db_logger.debug(f"Persisted quote {quote.code}-{quote.codein} bid={quote.bid} as row {row_id}")
        return row_id

    async def _insert_quote(self, quote: Quote) -> int:
        async with self._write_lock:
            async with self.get_async_session() as session:
                row = QuoteDB(
                    code=quote.code,
                    codein=quote.codein,
                    bid=quote.bid,
                    timestamp=quote.timestamp
                )
                session.add(row)
                await session.commit()
                return row.id

    async def count_quotes(self) -> int:
        """统计已保存的报价数量"""
        async with self.get_async_session() as session:
            return await session.scalar(select(func.count()).select_from(QuoteDB))

    async def get_latest_quotes(self, limit: int = 10) -> List[Quote]:
        """按写入顺序倒序获取最近的报价"""
        async with self.get_async_session() as session:
            stmt = select(QuoteDB).order_by(QuoteDB.id.desc()).limit(limit)
            result = await session.execute(stmt)
            return [Quote.model_validate(row) for row in result.scalars().all()]

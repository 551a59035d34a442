"""
Database connection management.
Provides a single-connection async SQLite engine for the quote log.
"""

import os
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from utils import db_logger, config_manager, resolve_path, DatabaseError, ErrorCodes


class DatabaseManager:
    """数据库管理器"""

    def __init__(self, db_path: Optional[str] = None):
        if db_path is None:
            db_path = str(resolve_path(config_manager.get_database_config().db_path))
        self.db_path = db_path
        self.async_engine: Optional[AsyncEngine] = None
        self.AsyncSessionLocal: Optional[async_sessionmaker] = None

    async def initialize(self):
        """初始化数据库连接并创建表"""
        if self.async_engine is not None:
            return

        # 确保数据目录存在
        db_dir = os.path.dirname(self.db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        db_logger.info(f"[Database] Using database path: {self.db_path}")

        # StaticPool：整个进程只持有一个连接，避免嵌入式数据库的写锁竞争
        self.async_engine = create_async_engine(
            f"sqlite+aiosqlite:///{self.db_path}",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False, "timeout": 5}
        )
        self.AsyncSessionLocal = async_sessionmaker(
            bind=self.async_engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False
        )

        try:
            await self.create_tables()
        except Exception:
            await self.close()
            raise

        db_logger.info("[Database] Database connection initialized successfully")

    async def create_tables(self):
        """创建数据库表"""
        from .models import Base

        async with self.async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        db_logger.info("[Database] Database tables created successfully")

    def get_async_session(self) -> AsyncSession:
        """获取异步数据库会话"""
        if not self.AsyncSessionLocal:
            raise DatabaseError("Database not initialized", ErrorCodes.DB_NOT_INITIALIZED)
        return self.AsyncSessionLocal()

    async def close(self):
        """关闭数据库连接"""
        if self.async_engine is not None:
            await self.async_engine.dispose()
            db_logger.info("[Database] Database connections closed")
        self.async_engine = None
        self.AsyncSessionLocal = None

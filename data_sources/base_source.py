"""
base data source class for the quote relay.
Owns the shared aiohttp session used by concrete upstream sources.
"""

from abc import ABC, abstractmethod
from typing import Optional

import aiohttp

from utils import ds_logger
from database.models import Quote


class BaseQuoteSource(ABC):
    """报价数据源基类"""

    user_agent = "QuoteRelay/1.0"

    def __init__(self, name: str):
        self.name = name
        self.aio_session: Optional[aiohttp.ClientSession] = None

    async def initialize(self):
        """创建HTTP会话"""
        if self.aio_session is not None and not self.aio_session.closed:
            return

        connector = aiohttp.TCPConnector(
            limit=32,
            keepalive_timeout=30,
            enable_cleanup_closed=True
        )
        self.aio_session = aiohttp.ClientSession(
            connector=connector,
            headers={'User-Agent': self.user_agent}
        )
        ds_logger.info(f"[{self.name}] HTTP session created")

    async def close(self):
        """关闭HTTP会话"""
        if self.aio_session is not None and not self.aio_session.closed:
            await self.aio_session.close()
            ds_logger.info(f"[{self.name}] HTTP session closed")
        self.aio_session = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self.aio_session is None or self.aio_session.closed:
            await self.initialize()
        return self.aio_session

    @abstractmethod
    async def fetch_quote(self, timeout: Optional[float] = None) -> Quote:
        """获取一条实时报价"""
        pass

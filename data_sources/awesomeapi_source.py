"""
AwesomeAPI data source implementation.
Fetches the latest currency quote (USD-BRL by default) under a hard deadline.
"""

import asyncio
import json
from typing import Optional, Dict, Any

import aiohttp
from pydantic import ValidationError

from .base_source import BaseQuoteSource
from database.models import Quote
from utils import (
    ds_logger, data_source_metrics, config_manager, UpstreamConfig,
    DataSourceError, NetworkError, UpstreamTimeoutError, InvalidQuoteError, ErrorCodes
)


class AwesomeAPISource(BaseQuoteSource):
    """AwesomeAPI数据源"""

    def __init__(self, name: str = "AwesomeAPI", config: Optional[UpstreamConfig] = None):
        super().__init__(name)
        config = config or config_manager.get_upstream_config()
        self.url = config.url
        self.pair_key = config.pair_key
        self.timeout = config.timeout

    async def fetch_quote(self, timeout: Optional[float] = None) -> Quote:
        """请求外部API并解析报价

        超时抛出 UpstreamTimeoutError，其他失败抛出 DataSourceError 及其子类。
        """
        deadline = timeout if timeout is not None else self.timeout
        session = await self._get_session()

        try:
            async with session.get(self.url, timeout=aiohttp.ClientTimeout(total=deadline)) as response:
                if response.status != 200:
                    data_source_metrics.increment("bad_status")
                    raise DataSourceError(
                        f"Upstream returned status {response.status}",
                        ErrorCodes.DATASOURCE_BAD_STATUS,
                        context={"status": response.status}
                    )
                raw = await response.read()
        except asyncio.TimeoutError as e:
            data_source_metrics.increment("timeout")
            raise UpstreamTimeoutError(
                f"Upstream did not answer within {deadline}s",
                ErrorCodes.NETWORK_TIMEOUT,
                context={"timeout": deadline}
            ) from e
        except aiohttp.ClientError as e:
            data_source_metrics.increment("connection_failure")
            raise NetworkError(
                f"Failed to call upstream: {e}",
                ErrorCodes.NETWORK_CONNECTION_ERROR
            ) from e

        quote = self._parse_quote(raw)
        data_source_metrics.increment("success")
        ds_logger.debug(f"[{self.name}] Fetched {quote.code}-{quote.codein} bid={quote.bid}")
        return quote

    def _parse_quote(self, raw: bytes) -> Quote:
        """解析 {"USDBRL": {"code", "codein", "bid", ...}} 格式的响应"""
        try:
            payload = json.loads(raw)
        except ValueError as e:
            data_source_metrics.increment("invalid_response")
            raise InvalidQuoteError(
                f"Failed to decode upstream response: {e}",
                ErrorCodes.DATASOURCE_INVALID_RESPONSE
            ) from e

        pair: Dict[str, Any] = payload.get(self.pair_key) if isinstance(payload, dict) else None
        if not isinstance(pair, dict):
            pair = {}

        bid = pair.get("bid")
        if not isinstance(bid, str) or not bid:
            data_source_metrics.increment("empty_bid")
            raise InvalidQuoteError(
                f"Upstream response has no '{self.pair_key}.bid' field",
                ErrorCodes.DATASOURCE_EMPTY_BID
            )

        try:
            return Quote(code=pair.get("code") or "", codein=pair.get("codein") or "", bid=bid)
        except ValidationError as e:
            data_source_metrics.increment("invalid_response")
            raise InvalidQuoteError(
                f"Upstream quote failed validation: {e}",
                ErrorCodes.DATASOURCE_INVALID_RESPONSE
            ) from e

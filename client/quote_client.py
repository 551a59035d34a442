"""
Quote client.
Calls the relay once and writes the returned bid to a local file.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import aiohttp

from utils import (
    client_logger, config_manager, log_execution, ClientConfig, ClientError, ErrorCodes
)

OUTPUT_TEMPLATE = "Dólar: {bid}"


def format_output(bid: str) -> str:
    """生成写入文件的内容"""
    return OUTPUT_TEMPLATE.format(bid=bid)


class QuoteClient:
    """单次调用的报价客户端"""

    def __init__(self, config: Optional[ClientConfig] = None,
                 server_url: Optional[str] = None,
                 timeout: Optional[float] = None,
                 output_file: Optional[str] = None):
        config = config or config_manager.get_client_config()
        self.server_url = server_url or config.server_url
        self.timeout = timeout if timeout is not None else config.timeout
        self.output_file = Path(output_file or config.output_file)

    async def fetch_bid(self) -> str:
        """请求服务端，返回非空的买入价"""
        client_timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                async with session.get(self.server_url) as response:
                    if response.status != 200:
                        raise ClientError(
                            f"Server returned status {response.status}",
                            ErrorCodes.CLIENT_BAD_STATUS,
                            context={"status": response.status}
                        )
                    raw = await response.read()
        except asyncio.TimeoutError as e:
            raise ClientError(
                f"Timed out calling server (>{self.timeout}s)",
                ErrorCodes.CLIENT_TIMEOUT
            ) from e
        except aiohttp.ClientError as e:
            raise ClientError(
                f"Failed to call server: {e}",
                ErrorCodes.CLIENT_CONNECTION_ERROR
            ) from e

        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise ClientError(
                f"Failed to decode server response: {e}",
                ErrorCodes.CLIENT_INVALID_RESPONSE
            ) from e

        bid = payload.get("bid") if isinstance(payload, dict) else None
        if not isinstance(bid, str) or not bid:
            raise ClientError(
                "Server response has no 'bid' field",
                ErrorCodes.CLIENT_INVALID_RESPONSE
            )
        return bid

    def write_bid(self, bid: str) -> str:
        """覆盖写入输出文件"""
        content = format_output(bid)
        try:
            self.output_file.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ClientError(
                f"Failed to write file {self.output_file}: {e}",
                ErrorCodes.CLIENT_WRITE_FAILED
            ) from e
        return content

    @log_execution("Client", "run")
    async def run(self) -> str:
        """获取报价并写入文件，返回写入的内容"""
        bid = await self.fetch_bid()
        content = self.write_bid(bid)
        client_logger.info(f"[Client] Quote saved to {self.output_file}: {content}")
        return content

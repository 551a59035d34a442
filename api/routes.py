"""
API routes for the quote relay.
Defines the quote endpoint and its upstream error mapping.
"""

import asyncio

from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse

from data_sources import quote_source
from database import db_ops
from utils import (
    api_logger, api_metrics, ErrorCodes,
    DataSourceError, UpstreamTimeoutError, DatabaseError
)
from .models import QuoteResponse

router = APIRouter()

# 上游失败时返回给调用方的纯文本说明
UPSTREAM_ERROR_MESSAGES = {
    ErrorCodes.DATASOURCE_BAD_STATUS: "upstream API failure",
    ErrorCodes.DATASOURCE_INVALID_RESPONSE: "failed to process quote",
    ErrorCodes.DATASOURCE_EMPTY_BID: "quote unavailable",
}

# 调用方已断开连接，响应不会被读取
CLIENT_CLOSED_REQUEST = 499


async def wait_for_disconnect(request: Request) -> None:
    """阻塞直到调用方断开连接"""
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            return


async def fetch_and_store():
    """获取报价并保存，返回对应的响应"""
    try:
        quote = await quote_source.fetch_quote()
    except UpstreamTimeoutError as e:
        api_logger.error(f"[API] Upstream timeout: {e}")
        api_metrics.increment("upstream_timeout")
        return PlainTextResponse("upstream API timeout", status_code=504)
    except DataSourceError as e:
        api_logger.error(f"[API] Upstream error: {e}")
        api_metrics.increment("upstream_error")
        message = UPSTREAM_ERROR_MESSAGES.get(e.error_code, "failed to fetch quote")
        return PlainTextResponse(message, status_code=502)

    # 持久化失败只记录日志，不影响响应
    try:
        await db_ops.insert_quote(quote)
    except DatabaseError as e:
        api_logger.error(f"[API] Failed to persist quote: {e}")
        api_metrics.increment("persist_failure")

    api_metrics.increment("quote_success")
    return QuoteResponse(bid=quote.bid)


@router.get(
    "/cotacao",
    response_model=QuoteResponse,
    responses={502: {"description": "上游失败"}, 504: {"description": "上游超时"}},
    tags=["Quotes"]
)
async def get_cotacao(request: Request):
    """获取实时报价，保存后返回买入价

    调用方断开连接时取消尚未完成的上游请求和写入。
    """
    work = asyncio.create_task(fetch_and_store())
    disconnect = asyncio.create_task(wait_for_disconnect(request))

    try:
        await asyncio.wait({work, disconnect}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        work.cancel()
        raise
    finally:
        disconnect.cancel()

    if not work.done():
        work.cancel()
        await asyncio.gather(work, return_exceptions=True)
        api_logger.warning("[API] Client disconnected, quote request cancelled")
        api_metrics.increment("client_cancelled")
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    return work.result()

"""
Middleware for the quote relay API.
Provides CORS, request logging and error handling.
"""

import time
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from utils import api_logger, config_manager, QuoteSystemError, create_error_response


class LoggingMiddleware(BaseHTTPMiddleware):
    """日志中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            api_logger.error(f"[API] {request.method} {request.url.path} from {client_ip} - ERROR - {process_time:.3f}s - {e}")
            raise

        process_time = time.time() - start_time
        api_logger.info(f"[API] {request.method} {request.url.path} from {client_ip} - {response.status_code} - {process_time:.3f}s")
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """错误处理中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except QuoteSystemError as e:
            api_logger.error(f"[API] Unhandled system error: {e}")
            return JSONResponse(status_code=500, content=create_error_response(e))

        except Exception as e:
            api_logger.error(f"[API] Unexpected error: {e}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={
                    "error": True,
                    "error_code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "context": {}
                }
            )


def setup_cors(app):
    """设置CORS"""
    cors_origins = config_manager.get_api_config().cors_origins

    if "*" in cors_origins:
        api_logger.warning("[CORS] Using wildcard origin is not recommended for production")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )


def setup_middleware(app):
    """设置所有中间件"""
    setup_cors(app)

    # 后添加的中间件在外层
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(LoggingMiddleware)

    api_logger.info("[API] Middleware setup completed")

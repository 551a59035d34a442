"""
FastAPI application for the quote relay.
Main application entry point for the API server.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI

from data_sources import quote_source
from database import db_ops
from utils import api_logger, QuoteSystemError, __version__

from .models import HealthResponse
from .routes import router
from .middleware import setup_middleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    api_logger.info("[API] Starting Quote Relay API...")

    try:
        await db_ops.initialize()
        api_logger.info("[API] Database initialized successfully")
    except QuoteSystemError as e:
        # 不阻止应用启动，写入失败会在每次请求时记录
        api_logger.error(f"[API] Failed to initialize database: {e}")

    await quote_source.initialize()

    yield

    api_logger.info("[API] Shutting down Quote Relay API...")
    await quote_source.close()
    await db_ops.close()


app = FastAPI(
    title="Quote Relay API",
    description="Relays the latest USD-BRL quote from AwesomeAPI and logs every fetch",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

setup_middleware(app)

app.include_router(router)


@app.get("/")
async def root():
    """根路径"""
    return {
        "message": "Quote Relay API",
        "version": __version__,
        "docs": "/docs",
        "status": "running"
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """健康检查端点"""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__
    )

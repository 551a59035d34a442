"""
API data models for the quote relay.
Pydantic models for response validation.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class QuoteResponse(BaseModel):
    """报价响应模型，只暴露买入价"""
    bid: str = Field(..., description="买入价", examples=["5.4321"])


class HealthResponse(BaseModel):
    """健康检查响应模型"""
    status: str = Field(..., description="服务状态")
    timestamp: datetime = Field(..., description="检查时间")
    version: str = Field(..., description="版本号")

"""
database models for the quote relay.
Append-only log of every quote fetched from the upstream API.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import declarative_base


def utc_now() -> datetime:
    """当前UTC时间"""
    return datetime.now(timezone.utc)


Base = declarative_base()


class QuoteDB(Base):
    """database model for fetched quotes"""
    __tablename__ = 'quotes'

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String, nullable=False)
    codein = Column(String, nullable=False)
    bid = Column(String, nullable=False)  # 以文本保存，保留上游的小数格式
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utc_now)


class Quote(BaseModel):
    """quote API model"""
    code: str = Field(..., description="原币种")
    codein: str = Field(..., description="目标币种")
    bid: str = Field(..., description="买入价")
    timestamp: datetime = Field(default_factory=utc_now, description="获取时间(UTC)")

    model_config = {"from_attributes": True}

    @field_validator('bid')
    @classmethod
    def bid_must_not_be_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("bid must not be empty")
        return value

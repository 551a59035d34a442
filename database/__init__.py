"""
Database module for the quote relay.
Provides async SQLite persistence for fetched quotes.
"""

from .connection import DatabaseManager
from .models import Base, Quote, QuoteDB
from .operations import DatabaseOperations

# 全局数据库操作实例（在API生命周期中初始化）
db_ops = DatabaseOperations()

__all__ = ['models', 'connection', 'operations', 'db_ops', 'DatabaseOperations',
           'DatabaseManager', 'Base', 'Quote', 'QuoteDB']

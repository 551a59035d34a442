"""
Data sources module for the quote relay.
"""

from .base_source import BaseQuoteSource
from .awesomeapi_source import AwesomeAPISource

# 全局报价数据源实例
quote_source = AwesomeAPISource()

__all__ = ['BaseQuoteSource', 'AwesomeAPISource', 'quote_source']

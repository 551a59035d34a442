"""
统一异常定义模块
提供项目特定的异常类和错误处理机制
"""

from typing import Optional, Dict, Any


class QuoteSystemError(Exception):
    """行情系统基础异常类"""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(QuoteSystemError):
    """配置相关错误"""
    pass


class DataSourceError(QuoteSystemError):
    """数据源相关错误"""
    pass


class NetworkError(DataSourceError):
    """网络连接错误"""
    pass


class UpstreamTimeoutError(DataSourceError):
    """外部API超时"""
    pass


class InvalidQuoteError(DataSourceError):
    """外部API返回的报价无法使用"""
    pass


class DatabaseError(QuoteSystemError):
    """数据库相关错误"""
    pass


class ClientError(QuoteSystemError):
    """客户端调用错误"""
    pass


# 错误代码常量
class ErrorCodes:
    """错误代码常量"""

    # 配置错误
    CONFIG_NOT_FOUND = "CONFIG_001"
    CONFIG_INVALID_FORMAT = "CONFIG_002"

    # 数据源错误
    DATASOURCE_BAD_STATUS = "DS_001"
    DATASOURCE_INVALID_RESPONSE = "DS_002"
    DATASOURCE_EMPTY_BID = "DS_003"

    # 数据库错误
    DB_CONNECTION_FAILED = "DB_001"
    DB_QUERY_FAILED = "DB_002"
    DB_TIMEOUT = "DB_003"
    DB_NOT_INITIALIZED = "DB_004"

    # 网络错误
    NETWORK_TIMEOUT = "NET_001"
    NETWORK_CONNECTION_ERROR = "NET_002"

    # 客户端错误
    CLIENT_TIMEOUT = "CLIENT_001"
    CLIENT_CONNECTION_ERROR = "CLIENT_002"
    CLIENT_BAD_STATUS = "CLIENT_003"
    CLIENT_INVALID_RESPONSE = "CLIENT_004"
    CLIENT_WRITE_FAILED = "CLIENT_005"


def create_error_response(error: QuoteSystemError) -> Dict[str, Any]:
    """创建标准化的错误响应"""
    return {
        "error": True,
        "error_code": error.error_code,
        "message": error.message,
        "context": error.context
    }

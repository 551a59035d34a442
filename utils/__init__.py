"""
工具模块包
提供项目所需的通用工具和功能
"""

# 导出核心工具
from .config_manager import (
    config_manager,
    UnifiedConfigManager,
    ApiConfig,
    ClientConfig,
    DatabaseConfig,
    LoggingConfig,
    LoggingModuleConfig,
    UpstreamConfig
)
from .exceptions import (
    QuoteSystemError,
    ConfigurationError,
    DataSourceError,
    NetworkError,
    UpstreamTimeoutError,
    InvalidQuoteError,
    DatabaseError,
    ClientError,
    ErrorCodes,
    create_error_response
)
from .logging_manager import (
    LogContext,
    log_execution,
    MetricsLogger,
    logging_manager,
    logger,
    data_source_metrics,
    database_metrics,
    api_metrics,
    LogConfig,
    initialize_logging,
    ModuleLoggers,
    api_logger,
    db_logger,
    ds_logger,
    client_logger,
    config_logger
)
from .path_utils import BASE_DIR, CONFIG_DIR, LOG_DIR, resolve_path

# 版本信息
__version__ = "1.0.0"

__all__ = [
    # 配置管理
    "config_manager",
    "UnifiedConfigManager",
    "ApiConfig",
    "ClientConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "LoggingModuleConfig",
    "UpstreamConfig",

    # 异常处理
    "QuoteSystemError",
    "ConfigurationError",
    "DataSourceError",
    "NetworkError",
    "UpstreamTimeoutError",
    "InvalidQuoteError",
    "DatabaseError",
    "ClientError",
    "ErrorCodes",
    "create_error_response",

    # 日志工具
    "LogContext",
    "log_execution",
    "MetricsLogger",
    "logging_manager",
    "logger",
    "data_source_metrics",
    "database_metrics",
    "api_metrics",
    "LogConfig",
    "initialize_logging",
    "ModuleLoggers",
    "api_logger",
    "db_logger",
    "ds_logger",
    "client_logger",
    "config_logger",

    # 路径工具
    "BASE_DIR",
    "CONFIG_DIR",
    "LOG_DIR",
    "resolve_path",
]

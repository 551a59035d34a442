"""
统一的配置管理模块
整合底层配置操作和应用层类型安全访问
"""

import json
import logging
from typing import Any, Callable, Optional, Dict, List, TypeVar
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigurationError, ErrorCodes
from .path_utils import CONFIG_DIR

# 获取配置专用日志器
config_logger = logging.getLogger("Config")

# 为泛型类型定义一个TypeVar
T = TypeVar('T')

# ============================================================================
# 配置数据类型定义
# ============================================================================

@dataclass
class LoggingModuleConfig:
    """模块日志配置"""
    level: str = "INFO"
    enabled: bool = True

@dataclass
class FileLoggingConfig:
    """文件日志配置"""
    enabled: bool = True
    directory: str = "log"
    filename: str = "sys.log"
    rotation: Optional[Dict[str, Any]] = None

@dataclass
class ConsoleLoggingConfig:
    """控制台日志配置"""
    enabled: bool = True

@dataclass
class LoggingConfig:
    """完整日志配置"""
    level: str = "INFO"
    format: str = "[%(levelname)s][%(asctime)s][%(filename)s:%(lineno)d] - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_config: FileLoggingConfig = field(default_factory=FileLoggingConfig)
    console_config: ConsoleLoggingConfig = field(default_factory=ConsoleLoggingConfig)
    modules: Dict[str, LoggingModuleConfig] = field(default_factory=dict)

@dataclass
class DatabaseConfig:
    """数据库配置"""
    db_path: str = "data/quotes.db"
    write_timeout: float = 0.01  # 单次写入的最长时间（秒）

@dataclass
class UpstreamConfig:
    """外部报价API配置"""
    url: str = "https://economia.awesomeapi.com.br/json/last/USD-BRL"
    pair_key: str = "USDBRL"
    timeout: float = 0.2

@dataclass
class ApiConfig:
    """API配置"""
    host: str = "0.0.0.0"
    port: int = 8080
    workers: int = 1
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

@dataclass
class ClientConfig:
    """客户端配置"""
    server_url: str = "http://localhost:8080/cotacao"
    timeout: float = 0.3
    output_file: str = "cotacao.txt"



# ============================================================================
# 配置段解析
# ============================================================================

def _build_logging_config(data: Dict[str, Any]) -> LoggingConfig:
    file_data = data.get('file_config', {})
    modules = {
        name: LoggingModuleConfig(
            level=module_data.get('level', 'INFO'),
            enabled=module_data.get('enabled', True)
        )
        for name, module_data in data.get('modules', {}).items()
    }
    return LoggingConfig(
        level=data.get('level', 'INFO'),
        file_config=FileLoggingConfig(
            enabled=file_data.get('enabled', True),
            directory=file_data.get('directory', 'log'),
            filename=file_data.get('filename', 'sys.log'),
            rotation=file_data.get('rotation')
        ),
        console_config=ConsoleLoggingConfig(
            enabled=data.get('console_config', {}).get('enabled', True)
        ),
        modules=modules
    )


def _build_database_config(data: Dict[str, Any]) -> DatabaseConfig:
    defaults = DatabaseConfig()
    return DatabaseConfig(
        db_path=data.get('db_path', defaults.db_path),
        write_timeout=float(data.get('write_timeout', defaults.write_timeout))
    )


def _build_upstream_config(data: Dict[str, Any]) -> UpstreamConfig:
    defaults = UpstreamConfig()
    return UpstreamConfig(
        url=data.get('url', defaults.url),
        pair_key=data.get('pair_key', defaults.pair_key),
        timeout=float(data.get('timeout', defaults.timeout))
    )


def _build_api_config(data: Dict[str, Any]) -> ApiConfig:
    defaults = ApiConfig()
    return ApiConfig(
        host=data.get('host', defaults.host),
        port=int(data.get('port', defaults.port)),
        workers=int(data.get('workers', defaults.workers)),
        cors_origins=list(data.get('cors_origins', defaults.cors_origins))
    )


def _build_client_config(data: Dict[str, Any]) -> ClientConfig:
    defaults = ClientConfig()
    return ClientConfig(
        server_url=data.get('server_url', defaults.server_url),
        timeout=float(data.get('timeout', defaults.timeout)),
        output_file=data.get('output_file', defaults.output_file)
    )


# ============================================================================
# 统一配置管理器
# ============================================================================

class UnifiedConfigManager:
    """统一配置管理器 - 整合底层操作和应用层抽象"""

    def __init__(self, config_dir: str = str(CONFIG_DIR)):
        self._config_dir = Path(config_dir)
        self._config_data: Dict[str, Any] = {}

        # 类型化配置缓存
        self._typed_cache: Dict[str, Any] = {}

        # 初始化配置
        self._load_config()

    def _load_config(self) -> None:
        """加载配置文件"""
        merged_config = {}
        config_logger.info(f"Loading configuration from directory: {self._config_dir}")

        if not self._config_dir.is_dir():
            raise ConfigurationError(
                f"Configuration path is not a directory: {self._config_dir}",
                ErrorCodes.CONFIG_NOT_FOUND
            )

        # 按文件名排序加载，确保加载顺序一致
        config_files = sorted(self._config_dir.glob('*.json'))
        if not config_files:
            raise ConfigurationError(
                f"No configuration files (.json) found in: {self._config_dir}",
                ErrorCodes.CONFIG_NOT_FOUND
            )

        for config_file in config_files:
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(
                    f"Invalid JSON in configuration file {config_file.name}: {e}",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                ) from e

            if not isinstance(data, dict):
                raise ConfigurationError(
                    f"Configuration file {config_file.name} must contain a JSON object",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                )
            merged_config.update(data)
            config_logger.debug(f"Loaded and merged: {config_file.name}")

        self._config_data = merged_config
        config_logger.info(f"Configuration loaded and merged from {len(config_files)} files.")
        # 清除类型化缓存
        self._typed_cache.clear()

    # ========================================================================
    # 底层访问方法
    # ========================================================================

    def get_nested(self, path: str, default: Optional[T] = None) -> Optional[T]:
        """获取嵌套配置值，支持点分隔路径"""
        keys = path.split('.')
        current = self._config_data

        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default

        return current

    def set_nested(self, path: str, value: Any) -> None:
        """设置嵌套配置值"""
        keys = path.split('.')
        current = self._config_data

        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value
        self._typed_cache.pop(keys[0], None)

    def __contains__(self, key: str) -> bool:
        return key in self._config_data

    # ========================================================================
    # 类型安全访问方法
    # ========================================================================

    def _typed(self, section: str, build: Callable[[Dict[str, Any]], T], default: Callable[[], T]) -> T:
        """解析并缓存配置段，格式错误时记录日志并使用默认值"""
        if section not in self._typed_cache:
            try:
                self._typed_cache[section] = build(self.get_nested(section, {}))
            except (AttributeError, TypeError, ValueError) as e:
                config_logger.error(f"Failed to parse {section}: {e}")
                self._typed_cache[section] = default()
        return self._typed_cache[section]

    def get_logging_config(self) -> LoggingConfig:
        return self._typed('logging_config', _build_logging_config, LoggingConfig)

    def get_database_config(self) -> DatabaseConfig:
        return self._typed('database_config', _build_database_config, DatabaseConfig)

    def get_upstream_config(self) -> UpstreamConfig:
        """外部报价API的地址、交易对和超时"""
        return self._typed('upstream_config', _build_upstream_config, UpstreamConfig)

    def get_api_config(self) -> ApiConfig:
        return self._typed('api_config', _build_api_config, ApiConfig)

    def get_client_config(self) -> ClientConfig:
        """客户端的服务端地址、超时和输出文件"""
        return self._typed('client_config', _build_client_config, ClientConfig)

    def update_from_dict(self, config_dict: Dict[str, Any]) -> None:
        """从字典更新配置"""
        self._config_data.update(config_dict)
        self._typed_cache.clear()
        config_logger.info("Configuration updated from dict")


# ============================================================================
# 全局单例实例
# ============================================================================

config_manager = UnifiedConfigManager()

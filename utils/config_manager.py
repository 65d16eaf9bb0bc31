"""
统一的配置管理模块
整合底层配置操作和应用层类型安全访问
"""

import json
import logging
from typing import Any, Optional, Dict, TypeVar, Union
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
class QuoteConfig:
    """报价配置"""
    message_timeout: int = 5000  # 请求超时（毫秒）
    expiry_duration: int = 10  # 默认目的端持有时长（秒）
    slow_exchange_threshold: float = 1.0  # 慢请求告警阈值（秒）

@dataclass
class HttpTransportConfig:
    """HTTP传输配置"""
    endpoint: str = "http://localhost:7768/ilp"
    prefix: str = "test.local."
    headers: Dict[str, str] = field(default_factory=dict)


# ============================================================================
# 统一配置管理器
# ============================================================================

class UnifiedConfigManager:
    """统一配置管理器 - 整合底层操作和应用层抽象"""

    def __init__(self, config_dir: Union[str, Path] = CONFIG_DIR):
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
            # 跳过合并后的导出文件
            if config_file.name == "config.merged.json":
                continue
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(
                    f"Invalid JSON in configuration file {config_file.name}: {e}",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                ) from e
            except OSError as e:
                raise ConfigurationError(
                    f"Failed to read configuration file {config_file.name}: {e}",
                    ErrorCodes.CONFIG_LOAD_ERROR
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

    def reload_config(self) -> None:
        """重新加载配置"""
        config_logger.info("Reloading configuration...")
        self._load_config()

    # ========================================================================
    # 底层访问方法
    # ========================================================================

    def get(self, key: str, default: Optional[T] = None) -> Optional[T]:
        """获取配置值"""
        return self._config_data.get(key, default)

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

    def set(self, key: str, value: Any) -> None:
        """设置配置值"""
        self._config_data[key] = value
        # 配置段变化后类型化结果全部失效
        self._typed_cache.clear()

    def __contains__(self, key: str) -> bool:
        """支持 'in' 操作符"""
        return key in self._config_data

    def __getitem__(self, key: str) -> Any:
        """支持字典式访问"""
        return self._config_data[key]

    # ========================================================================
    # 类型安全访问方法
    # ========================================================================

    def get_logging_config(self) -> LoggingConfig:
        """获取日志配置（类型安全）"""
        if 'logging_config' not in self._typed_cache:
            try:
                logging_data = self.get_nested('logging_config', {})

                # 解析文件日志配置
                file_data = logging_data.get('file_config', {})
                file_config = FileLoggingConfig(
                    enabled=file_data.get('enabled', True),
                    directory=file_data.get('directory', 'log'),
                    filename=file_data.get('filename', 'sys.log'),
                    rotation=file_data.get('rotation')
                )

                # 解析控制台日志配置
                console_data = logging_data.get('console_config', {})
                console_config = ConsoleLoggingConfig(
                    enabled=console_data.get('enabled', True)
                )

                # 解析模块配置
                modules = {}
                for module_name, module_data in logging_data.get('modules', {}).items():
                    modules[module_name] = LoggingModuleConfig(
                        level=module_data.get('level', 'INFO'),
                        enabled=module_data.get('enabled', True)
                    )

                self._typed_cache['logging_config'] = LoggingConfig(
                    level=logging_data.get('level', 'INFO'),
                    file_config=file_config,
                    console_config=console_config,
                    modules=modules
                )
            except (AttributeError, TypeError) as e:
                config_logger.error(f"Failed to parse logging config: {e}")
                self._typed_cache['logging_config'] = LoggingConfig()

        return self._typed_cache['logging_config']

    def get_quote_config(self) -> QuoteConfig:
        """获取报价配置（类型安全）"""
        if 'quote_config' not in self._typed_cache:
            try:
                quote_data = self.get_nested('quote_config', {})
                self._typed_cache['quote_config'] = QuoteConfig(
                    message_timeout=int(quote_data.get('message_timeout', 5000)),
                    expiry_duration=int(quote_data.get('expiry_duration', 10)),
                    slow_exchange_threshold=float(quote_data.get('slow_exchange_threshold', 1.0))
                )
            except (AttributeError, TypeError, ValueError) as e:
                config_logger.error(f"Failed to parse quote config: {e}")
                self._typed_cache['quote_config'] = QuoteConfig()

        return self._typed_cache['quote_config']

    def get_transport_config(self) -> HttpTransportConfig:
        """获取HTTP传输配置（类型安全）"""
        if 'transport_config' not in self._typed_cache:
            try:
                transport_data = self.get_nested('transport_config', {})
                defaults = HttpTransportConfig()
                self._typed_cache['transport_config'] = HttpTransportConfig(
                    endpoint=transport_data.get('endpoint', defaults.endpoint),
                    prefix=transport_data.get('prefix', defaults.prefix),
                    headers=dict(transport_data.get('headers', {}))
                )
            except (AttributeError, TypeError, ValueError) as e:
                config_logger.error(f"Failed to parse transport config: {e}")
                self._typed_cache['transport_config'] = HttpTransportConfig()

        return self._typed_cache['transport_config']

    # ========================================================================
    # 便捷方法
    # ========================================================================

    def save_config(self, file_path: Optional[str] = None) -> None:
        """保存配置到文件"""
        # 默认保存为一个合并后的文件，而不是覆盖拆分的文件
        if file_path:
            save_path = Path(file_path)
        else:
            save_path = self._config_dir / "config.merged.json"

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)

            with open(save_path, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
            config_logger.info(f"Current merged configuration saved to: {save_path}")
        except OSError as e:
            raise ConfigurationError(
                f"Failed to save configuration: {e}",
                ErrorCodes.CONFIG_SAVE_ERROR
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        """返回配置数据的字典副本"""
        return self._config_data.copy()

    def update_from_dict(self, config_dict: Dict[str, Any]) -> None:
        """从字典更新配置"""
        self._config_data.update(config_dict)
        self._typed_cache.clear()  # 清除缓存
        config_logger.info("Configuration updated from dict")

    def clear_cache(self) -> None:
        """清除类型化配置缓存"""
        self._typed_cache.clear()
        config_logger.debug("Configuration cache cleared")


# ============================================================================
# 全局单例实例
# ============================================================================

config_manager = UnifiedConfigManager()

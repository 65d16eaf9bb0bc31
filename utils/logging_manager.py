"""
统一的日志管理模块
整合基础日志配置和性能日志功能
"""

import asyncio
import logging
import sys
import os
import time
import functools
import threading
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional, Dict, Callable
from dataclasses import dataclass

from .exceptions import QuoteClientError, ErrorCodes
from .config_manager import config_manager
from .path_utils import BASE_DIR


@dataclass
class LogConfig:
    """日志配置"""
    level: str = "INFO"
    format: str = "[%(levelname)s][%(asctime)s][%(filename)s:%(lineno)d] - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_max_bytes: int = 10 * 1024 * 1024  # 10MB
    file_backup_count: int = 5
    enable_console: bool = True
    enable_file: bool = True
    log_directory: Optional[str] = None
    log_filename: str = "sys.log"


class LoggingManager:
    """统一的日志管理器"""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, '_initialized'):
            return

        self._initialized = True
        self._loggers: Dict[str, logging.Logger] = {}
        self._config = LogConfig()

    def configure(self, config: LogConfig = None):
        """配置日志系统"""
        if config:
            self._config = config

        # 设置根日志级别
        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, self._config.level.upper(), logging.INFO))

        # 清除现有处理器
        self._clear_handlers(root_logger)

        if self._config.enable_console:
            self._add_console_handler(root_logger)

        if self._config.enable_file:
            # 未设置目录时使用项目根目录下的 log 文件夹
            if self._config.log_directory is None:
                self._config.log_directory = str(BASE_DIR / "log")
            Path(self._config.log_directory).mkdir(parents=True, exist_ok=True)
            self._add_file_handler(root_logger)

    def configure_from_config_file(self):
        """从配置文件加载日志配置"""
        logging_config = config_manager.get_logging_config()

        # 相对路径相对于项目根目录
        log_directory = logging_config.file_config.directory
        if not os.path.isabs(log_directory):
            log_directory = str(BASE_DIR / log_directory)

        rotation_config = logging_config.file_config.rotation or {}

        config = LogConfig(
            level=logging_config.level,
            format=logging_config.format,
            date_format=logging_config.date_format,
            file_max_bytes=rotation_config.get('max_bytes_mb', 10) * 1024 * 1024,
            file_backup_count=rotation_config.get('backup_count', 5),
            enable_console=logging_config.console_config.enabled,
            enable_file=logging_config.file_config.enabled,
            log_directory=log_directory,
            log_filename=logging_config.file_config.filename
        )

        self.configure(config)

        # 配置模块特定的日志级别
        for module_name, module_config in logging_config.modules.items():
            module_logger = self.get_logger(module_name)
            if module_config.enabled:
                module_logger.setLevel(getattr(logging, module_config.level.upper(), logging.INFO))
            else:
                # 禁用的模块只保留严重错误
                module_logger.setLevel(logging.CRITICAL)

        return logging_config

    def _clear_handlers(self, logger: logging.Logger):
        """清除现有处理器"""
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    def _add_console_handler(self, logger: logging.Logger):
        """添加控制台处理器"""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(
            self._config.format,
            datefmt=self._config.date_format
        ))
        logger.addHandler(console_handler)

    def _add_file_handler(self, logger: logging.Logger):
        """添加文件处理器"""
        log_file_path = Path(self._config.log_directory) / self._config.log_filename

        file_handler = RotatingFileHandler(
            filename=log_file_path,
            maxBytes=self._config.file_max_bytes,
            backupCount=self._config.file_backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter(
            self._config.format,
            datefmt=self._config.date_format
        ))
        logger.addHandler(file_handler)

    def get_logger(self, name: str = None) -> logging.Logger:
        """获取日志记录器"""
        if name is None:
            name = "quoteclient"

        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)

        return self._loggers[name]

    def set_level(self, level: str, logger_name: str = None):
        """设置日志级别"""
        log_level = getattr(logging, level.upper(), logging.INFO)

        if logger_name:
            self.get_logger(logger_name).setLevel(log_level)
        else:
            logging.getLogger().setLevel(log_level)


def log_performance(module: str, threshold: float = 1.0):
    """性能监控日志装饰器"""
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            start_time = time.monotonic()
            try:
                return func(*args, **kwargs)
            finally:
                _log_duration(module, func.__name__, time.monotonic() - start_time, threshold)

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = time.monotonic()
            try:
                return await func(*args, **kwargs)
            finally:
                _log_duration(module, func.__name__, time.monotonic() - start_time, threshold)

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def _log_duration(module: str, func_name: str, duration: float, threshold: float):
    """按阈值记录耗时"""
    logger = logging_manager.get_logger(module)
    if duration > threshold:
        logger.warning(f"[{module}] Slow operation: {func_name} took {duration:.2f}s")
    else:
        logger.debug(f"[{module}] {func_name} completed in {duration:.2f}s")


# 全局日志管理器实例
logging_manager = LoggingManager()

logger = logging_manager.get_logger()


class ModuleLoggers:
    """模块专用日志器集合"""

    ILQP = logging_manager.get_logger("ILQP")
    Connector = logging_manager.get_logger("Connector")
    Transport = logging_manager.get_logger("Transport")
    Codec = logging_manager.get_logger("Codec")
    Config = logging_manager.get_logger("Config")

    @classmethod
    def get_logger(cls, module_name: str):
        """获取指定模块的日志器"""
        return logging_manager.get_logger(module_name)


# 便捷的模块日志器别名
ilqp_logger = ModuleLoggers.ILQP
connector_logger = ModuleLoggers.Connector
transport_logger = ModuleLoggers.Transport
codec_logger = ModuleLoggers.Codec
config_logger = ModuleLoggers.Config


def initialize_logging(use_config_file: bool = True):
    """初始化日志系统"""
    try:
        if use_config_file:
            logging_manager.configure_from_config_file()
        else:
            logging_manager.configure()

        logger.info("Logging system initialized successfully")
        return True

    except (OSError, ValueError, AttributeError) as e:
        # 配置文件初始化失败时回退到默认配置
        if use_config_file:
            print(f"Failed to initialize logging from config file: {e}")
            print("Falling back to default configuration...")
            try:
                logging_manager.configure(LogConfig(enable_file=False))
                logger.info("Logging system initialized with fallback config")
                return True
            except (OSError, ValueError) as fallback_e:
                print(f"Fallback initialization also failed: {fallback_e}")

        raise QuoteClientError(
            f"Failed to initialize logging: {str(e)}",
            ErrorCodes.CONFIG_INVALID_FORMAT
        ) from e


# 自动初始化（使用配置文件）
initialize_logging(use_config_file=True)

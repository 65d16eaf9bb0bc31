"""
工具模块包
提供报价客户端所需的通用工具和功能
"""

# 导出核心工具
from .config_manager import (
    config_manager,
    UnifiedConfigManager,
    LoggingConfig,
    LoggingModuleConfig,
    QuoteConfig,
    HttpTransportConfig
)
from .exceptions import (
    QuoteClientError,
    ConfigurationError,
    InvalidArgumentError,
    PacketCodecError,
    QuoteTimeoutError,
    TransportError,
    MalformedResponseError,
    ProtocolViolationError,
    EmptyResponseError,
    RemoteQuoteError,
    ErrorCodes,
    create_error_response
)
from .logging_manager import (
    log_performance,
    logging_manager,
    logger,
    LogConfig,
    initialize_logging,
    ModuleLoggers,
    ilqp_logger,
    connector_logger,
    transport_logger,
    codec_logger,
    config_logger
)
from .path_utils import BASE_DIR, CONFIG_DIR, LOG_DIR
from .address_utils import is_valid_address, is_local_address

# 版本信息
__version__ = "1.0.0"

__all__ = [
    # 配置管理
    "config_manager",
    "UnifiedConfigManager",
    "LoggingConfig",
    "LoggingModuleConfig",
    "QuoteConfig",
    "HttpTransportConfig",

    # 异常处理
    "QuoteClientError",
    "ConfigurationError",
    "InvalidArgumentError",
    "PacketCodecError",
    "QuoteTimeoutError",
    "TransportError",
    "MalformedResponseError",
    "ProtocolViolationError",
    "EmptyResponseError",
    "RemoteQuoteError",
    "ErrorCodes",
    "create_error_response",

    # 日志工具
    "log_performance",
    "logging_manager",
    "logger",
    "LogConfig",
    "initialize_logging",
    "ModuleLoggers",
    "ilqp_logger",
    "connector_logger",
    "transport_logger",
    "codec_logger",
    "config_logger",

    # 路径工具
    "BASE_DIR",
    "CONFIG_DIR",
    "LOG_DIR",

    # 地址工具
    "is_valid_address",
    "is_local_address",
]

"""
统一异常定义模块
提供报价客户端的异常类和错误处理机制
"""

from typing import Optional, Dict, Any


class QuoteClientError(Exception):
    """报价客户端基础异常类"""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(QuoteClientError):
    """配置相关错误"""
    pass


class InvalidArgumentError(QuoteClientError):
    """调用参数错误（在任何网络交互之前抛出）"""
    pass


class PacketCodecError(QuoteClientError):
    """数据包编解码错误"""
    pass


class QuoteTimeoutError(QuoteClientError):
    """传输层未在超时时间内响应"""
    pass


class TransportError(QuoteClientError):
    """传输层拒绝请求（连接失败等）"""
    pass


class MalformedResponseError(QuoteClientError):
    """响应存在但缺少可用的数据包"""
    pass


class ProtocolViolationError(QuoteClientError):
    """响应类型既不是错误包也不是预期的成功响应"""
    pass


class EmptyResponseError(QuoteClientError):
    """连接器交换没有返回可用结果"""
    pass


class RemoteQuoteError(QuoteClientError):
    """连接器返回了应用层错误包"""

    def __init__(self, message: str, ilp_error: Any = None,
                 error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, context)
        self.ilp_error = ilp_error

    @property
    def name(self) -> Optional[str]:
        """远端错误名称"""
        return getattr(self.ilp_error, 'name', None)


# 错误代码常量
class ErrorCodes:
    """错误代码常量"""

    # 配置错误
    CONFIG_NOT_FOUND = "CONFIG_001"
    CONFIG_INVALID_FORMAT = "CONFIG_002"
    CONFIG_LOAD_ERROR = "CONFIG_003"
    CONFIG_SAVE_ERROR = "CONFIG_004"

    # 参数错误
    ARG_AMOUNT_REQUIRED = "ARG_001"
    ARG_INVALID_AMOUNT = "ARG_002"
    ARG_INVALID_ADDRESS = "ARG_003"
    ARG_INVALID_DURATION = "ARG_004"
    ARG_INVALID_TIMEOUT = "ARG_005"
    ARG_INVALID = "ARG_006"

    # 编解码错误
    CODEC_TRUNCATED = "CODEC_001"
    CODEC_UNKNOWN_TYPE = "CODEC_002"
    CODEC_OUT_OF_RANGE = "CODEC_003"
    CODEC_INVALID_FIELD = "CODEC_004"

    # 网络错误
    NETWORK_TIMEOUT = "NET_001"
    NETWORK_CONNECTION_ERROR = "NET_002"
    NETWORK_BAD_STATUS = "NET_003"

    # 报价协议错误
    QUOTE_NO_PACKET = "ILQP_001"
    QUOTE_INCORRECT_TYPE = "ILQP_002"
    QUOTE_EMPTY_RESPONSE = "ILQP_003"
    QUOTE_REMOTE_ERROR = "ILQP_004"


def create_error_response(error: QuoteClientError,
                         include_traceback: bool = False) -> Dict[str, Any]:
    """创建标准化的错误响应"""
    response = {
        "error": True,
        "error_code": error.error_code,
        "message": error.message,
        "context": error.context
    }

    if include_traceback:
        import traceback
        response["traceback"] = traceback.format_exc()

    return response

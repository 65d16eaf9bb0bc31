"""
Connector exchange.
Sends one encoded quote request over a transport and validates that the reply
is either an error packet or the success response paired with the request.
"""

import asyncio
from typing import Optional

from codec import (
    TYPE_ILP_ERROR,
    decode_base64_packet,
    deserialize_packet,
    encode_base64_packet,
    packet_type_of,
)
from transport.base_transport import BaseTransport
from utils import connector_logger, log_performance
from utils.config_manager import QuoteConfig
from utils.exceptions import (
    ErrorCodes,
    MalformedResponseError,
    PacketCodecError,
    ProtocolViolationError,
    QuoteClientError,
    QuoteTimeoutError,
    TransportError,
)
from .models import ConnectorResponse, QuoteQuery
from .request_codec import encode_quote_request


async def quote_by_connector(transport: BaseTransport, quote_query: QuoteQuery,
                             timeout: Optional[int] = None,
                             config: Optional[QuoteConfig] = None) -> ConnectorResponse:
    """
    向连接器发送报价请求并返回解码后的响应

    Args:
        transport: 已连接的传输
        quote_query: 报价查询
        timeout: 超时时间（毫秒），默认使用 QuoteConfig.message_timeout
        config: 报价配置

    Returns:
        成功响应，或连接器返回的 IlpError（错误包不会抛出）
    """
    config = config or QuoteConfig()
    # 慢请求阈值随调用方的配置变化
    exchange = log_performance("Connector", threshold=config.slow_exchange_threshold)(_exchange)
    return await exchange(transport, quote_query, timeout or config.message_timeout)


async def _exchange(transport: BaseTransport, quote_query: QuoteQuery, timeout: int) -> ConnectorResponse:
    """发送一次报价请求并校验响应"""
    request_packet, request_type = encode_quote_request(quote_query)
    connector_logger.debug(f"[Connector] Remote quote query={quote_query}")

    try:
        response = await asyncio.wait_for(
            transport.send_request({
                'ilp': encode_base64_packet(request_packet),
                'timeout': timeout
            }),
            timeout / 1000
        )
    except (asyncio.TimeoutError, TimeoutError) as e:
        raise QuoteTimeoutError(
            f"Quote request timed out after {timeout}ms",
            ErrorCodes.NETWORK_TIMEOUT,
            context={'timeout': timeout, 'request_type': request_type}
        ) from e
    except QuoteClientError:
        raise
    except Exception as e:
        raise TransportError(
            f"Quote request failed: {e}",
            ErrorCodes.NETWORK_CONNECTION_ERROR,
            context={'request_type': request_type}
        ) from e

    encoded = response.get('ilp') if isinstance(response, dict) else None
    if not encoded:
        raise MalformedResponseError("Quote response has no packet", ErrorCodes.QUOTE_NO_PACKET)

    try:
        response_packet = decode_base64_packet(encoded)
        # 类型码必须从原始字节读取，解码方式取决于类型
        response_type = packet_type_of(response_packet)
    except PacketCodecError as e:
        raise MalformedResponseError(f"Quote response packet is unreadable: {e.message}",
                                     ErrorCodes.QUOTE_NO_PACKET) from e

    if response_type != TYPE_ILP_ERROR and response_type != request_type + 1:
        raise ProtocolViolationError(
            "Quote response packet has incorrect type",
            ErrorCodes.QUOTE_INCORRECT_TYPE,
            context={'request_type': request_type, 'response_type': response_type}
        )

    try:
        packet = deserialize_packet(response_packet)
    except PacketCodecError as e:
        raise MalformedResponseError(f"Quote response packet is malformed: {e.message}",
                                     ErrorCodes.QUOTE_NO_PACKET) from e

    if response_type == TYPE_ILP_ERROR:
        connector_logger.warning(f"[Connector] Remote quote error: ilp_error={packet}")
    return packet

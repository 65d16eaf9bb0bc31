"""
HTTP transport implementation.
Posts raw packets to a connector endpoint and returns the raw reply body.
"""

import asyncio
import aiohttp
from typing import Any, Dict, Optional

from .base_transport import BaseTransport
from codec import decode_base64_packet, encode_base64_packet
from utils import transport_logger
from utils.config_manager import HttpTransportConfig
from utils.exceptions import TransportError, ErrorCodes


class HttpTransportConstants:
    """HTTP传输的常量"""
    CONTENT_TYPE = "application/octet-stream"
    TIMEOUT_HEADER = "ILP-Timeout"
    CONNECT_TIMEOUT = 15


class HttpTransport(BaseTransport):
    """基于 aiohttp 的传输"""

    def __init__(self, config: HttpTransportConfig, name: str = "HttpTransport"):
        super().__init__(name)
        self.config = config
        self.aio_session: Optional[aiohttp.ClientSession] = None

    async def _connect_impl(self, timeout: Optional[int]):
        """创建异步HTTP会话"""
        connect_timeout = timeout / 1000 if timeout else HttpTransportConstants.CONNECT_TIMEOUT
        self.aio_session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(connect=connect_timeout),
            headers=self.config.headers
        )

    def get_info(self) -> Dict[str, Any]:
        return {'prefix': self.config.prefix}

    async def send_request(self, message: Dict[str, Any]) -> Dict[str, Any]:
        """发送数据包并等待响应"""
        if self.aio_session is None:
            raise TransportError(f"[{self.name}] Transport is not connected",
                                 ErrorCodes.NETWORK_CONNECTION_ERROR)

        packet = decode_base64_packet(message['ilp'])
        timeout_ms = message.get('timeout')
        headers = {'Content-Type': HttpTransportConstants.CONTENT_TYPE}
        request_kwargs: Dict[str, Any] = {}
        if timeout_ms:
            headers[HttpTransportConstants.TIMEOUT_HEADER] = str(timeout_ms)
            request_kwargs['timeout'] = aiohttp.ClientTimeout(total=timeout_ms / 1000)

        transport_logger.debug(f"[{self.name}] POST {len(packet)} bytes to {self.config.endpoint}")
        try:
            async with self.aio_session.post(
                self.config.endpoint,
                data=packet,
                headers=headers,
                **request_kwargs
            ) as response:
                body = await response.read()
                if response.status >= 300:
                    raise TransportError(
                        f"[{self.name}] Connector responded with HTTP {response.status}",
                        ErrorCodes.NETWORK_BAD_STATUS,
                        context={'status': response.status}
                    )
        except asyncio.TimeoutError:
            # 超时交给调用方统一处理
            raise
        except aiohttp.ClientError as e:
            raise TransportError(
                f"[{self.name}] Request to {self.config.endpoint} failed: {e}",
                ErrorCodes.NETWORK_CONNECTION_ERROR
            ) from e

        return {'ilp': encode_base64_packet(body)}

    async def _close_impl(self):
        if self.aio_session:
            await self.aio_session.close()
            self.aio_session = None

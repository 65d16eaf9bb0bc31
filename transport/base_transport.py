"""
base transport class for the quote client.
A transport sends one serialized request packet and resolves the matching
reply; correlating concurrent requests is the transport's own job.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from utils import transport_logger
from utils.exceptions import QuoteClientError, QuoteTimeoutError, TransportError, ErrorCodes


class BaseTransport(ABC):
    """传输层基类"""

    def __init__(self, name: str):
        self.name = name
        self._connected = False
        self._connect_lock = asyncio.Lock()

    async def connect(self, timeout: Optional[int] = None):
        """建立连接（已连接时为空操作，并发调用只连接一次）"""
        async with self._connect_lock:
            if self._connected:
                return
            transport_logger.info(f"[{self.name}] Connecting transport...")
            await self._connect_impl(timeout)
            self._connected = True
            transport_logger.info(f"[{self.name}] Transport connected")

    @abstractmethod
    async def _connect_impl(self, timeout: Optional[int]):
        """连接实现"""
        pass

    def is_connected(self) -> bool:
        """是否已连接"""
        return self._connected

    @abstractmethod
    def get_info(self) -> Dict[str, Any]:
        """获取账本信息，至少包含 prefix"""
        pass

    @abstractmethod
    async def send_request(self, message: Dict[str, Any]) -> Dict[str, Any]:
        """发送请求 {'ilp': base64, 'timeout': 毫秒}，返回 {'ilp': base64}"""
        pass

    async def close(self):
        """关闭连接"""
        await self._close_impl()
        self._connected = False
        transport_logger.info(f"[{self.name}] Transport closed")

    async def _close_impl(self):
        """关闭实现（子类可以选择性重写）"""
        pass


async def safe_connect(transport: BaseTransport, timeout: Optional[int] = None):
    """确保传输已连接，timeout 为毫秒"""
    if transport.is_connected():
        return

    try:
        if timeout:
            await asyncio.wait_for(transport.connect(timeout), timeout / 1000)
        else:
            await transport.connect(timeout)
    except (asyncio.TimeoutError, TimeoutError) as e:
        raise QuoteTimeoutError(
            f"Transport did not connect within {timeout}ms",
            ErrorCodes.NETWORK_TIMEOUT,
            context={'timeout': timeout}
        ) from e
    except QuoteClientError:
        raise
    except Exception as e:
        raise TransportError(
            f"Transport failed to connect: {e}",
            ErrorCodes.NETWORK_CONNECTION_ERROR
        ) from e

"""
账户地址工具
地址由账本前缀加本地路径组成，例如 g.eur.bob 属于前缀 g.eur.
"""

import re

# 地址允许的字符集合
ADDRESS_PATTERN = re.compile(r'^[a-zA-Z0-9._~-]+$')


def is_valid_address(address: str) -> bool:
    """检查地址格式是否合法"""
    return isinstance(address, str) and bool(ADDRESS_PATTERN.match(address))


def is_local_address(prefix: str, address: str) -> bool:
    """地址是否位于给定账本前缀之下（纯字符串前缀判断）"""
    if not prefix:
        return False
    return address.startswith(prefix)

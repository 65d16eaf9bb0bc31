"""
OER primitive encoding used by the packet codec.
Fixed-width unsigned integers are big-endian; variable-length fields carry a
length prefix (one byte below 128, otherwise 0x80|n followed by n length bytes).
"""

from typing import List

from utils.exceptions import PacketCodecError, ErrorCodes

MAX_UINT8 = 0xFF
MAX_UINT32 = 0xFFFFFFFF
MAX_UINT64 = 0xFFFFFFFFFFFFFFFF


def _uint_to_bytes(value: int) -> bytes:
    """最短大端字节表示（0 编码为一个字节）"""
    length = max(1, (value.bit_length() + 7) // 8)
    return value.to_bytes(length, 'big')


class Writer:
    """OER写入器"""

    def __init__(self):
        self._parts: List[bytes] = []

    def write_uint(self, value: int, length: int, field: str = 'value') -> None:
        """写入定长无符号整数"""
        if isinstance(value, bool) or not isinstance(value, int):
            raise PacketCodecError(f"{field} must be an integer, got {value!r}",
                                   ErrorCodes.CODEC_INVALID_FIELD)
        if value < 0 or value >= 1 << (8 * length):
            raise PacketCodecError(f"{field} out of range for uint{8 * length}: {value}",
                                   ErrorCodes.CODEC_OUT_OF_RANGE)
        self._parts.append(value.to_bytes(length, 'big'))

    def write_uint8(self, value: int, field: str = 'value') -> None:
        self.write_uint(value, 1, field)

    def write_uint32(self, value: int, field: str = 'value') -> None:
        self.write_uint(value, 4, field)

    def write_uint64(self, value: int, field: str = 'value') -> None:
        self.write_uint(value, 8, field)

    def write_length_prefix(self, length: int) -> None:
        """写入长度前缀"""
        if length < 0x80:
            self._parts.append(bytes([length]))
        else:
            length_bytes = _uint_to_bytes(length)
            if len(length_bytes) > 0x7F:
                raise PacketCodecError("Length prefix too large", ErrorCodes.CODEC_OUT_OF_RANGE)
            self._parts.append(bytes([0x80 | len(length_bytes)]) + length_bytes)

    def write_var_uint(self, value: int, field: str = 'value') -> None:
        """写入变长无符号整数"""
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise PacketCodecError(f"{field} must be a non-negative integer, got {value!r}",
                                   ErrorCodes.CODEC_INVALID_FIELD)
        self.write_var_octet_string(_uint_to_bytes(value))

    def write_var_octet_string(self, data: bytes) -> None:
        """写入变长字节串"""
        self.write_length_prefix(len(data))
        self._parts.append(bytes(data))

    def write_ascii(self, text: str, field: str = 'value') -> None:
        """写入变长ASCII字符串"""
        try:
            encoded = text.encode('ascii')
        except (AttributeError, UnicodeEncodeError) as e:
            raise PacketCodecError(f"{field} must be an ASCII string, got {text!r}",
                                   ErrorCodes.CODEC_INVALID_FIELD) from e
        self.write_var_octet_string(encoded)

    def write_octets(self, data: bytes) -> None:
        """写入定长字节"""
        self._parts.append(bytes(data))

    def getvalue(self) -> bytes:
        return b''.join(self._parts)


class Reader:
    """OER读取器"""

    def __init__(self, buffer: bytes):
        self._buffer = bytes(buffer)
        self._cursor = 0

    @property
    def remaining(self) -> int:
        return len(self._buffer) - self._cursor

    def read_octets(self, length: int) -> bytes:
        """读取定长字节"""
        if length > self.remaining:
            raise PacketCodecError(
                f"Unexpected end of buffer: need {length} bytes, {self.remaining} left",
                ErrorCodes.CODEC_TRUNCATED
            )
        chunk = self._buffer[self._cursor:self._cursor + length]
        self._cursor += length
        return chunk

    def read_uint(self, length: int) -> int:
        return int.from_bytes(self.read_octets(length), 'big')

    def read_uint8(self) -> int:
        return self.read_uint(1)

    def read_uint32(self) -> int:
        return self.read_uint(4)

    def read_uint64(self) -> int:
        return self.read_uint(8)

    def read_length_prefix(self) -> int:
        """读取长度前缀"""
        first = self.read_uint8()
        if first < 0x80:
            return first
        length_of_length = first & 0x7F
        if length_of_length == 0:
            raise PacketCodecError("Invalid length prefix", ErrorCodes.CODEC_INVALID_FIELD)
        return self.read_uint(length_of_length)

    def read_var_octet_string(self) -> bytes:
        return self.read_octets(self.read_length_prefix())

    def read_var_uint(self) -> int:
        data = self.read_var_octet_string()
        if not data:
            raise PacketCodecError("Empty variable-length integer", ErrorCodes.CODEC_INVALID_FIELD)
        return int.from_bytes(data, 'big')

    def read_ascii(self, field: str = 'value') -> str:
        """读取变长ASCII字符串"""
        data = self.read_var_octet_string()
        try:
            return data.decode('ascii')
        except UnicodeDecodeError as e:
            raise PacketCodecError(f"{field} is not valid ASCII",
                                   ErrorCodes.CODEC_INVALID_FIELD) from e

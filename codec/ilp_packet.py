"""
ILP packet codec.
Every packet is an envelope of one type byte followed by length-prefixed
contents. Each ILQP request type is immediately followed by its response type,
and TYPE_ILP_ERROR decodes the same way whatever request it answers.
"""

import base64
import binascii
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Tuple, Type, Union

from utils import codec_logger
from utils.exceptions import PacketCodecError, ErrorCodes
from utils.date_utils import to_generalized_time, parse_generalized_time
from .oer import Reader, Writer

TYPE_ILP_PAYMENT = 1
TYPE_ILQP_LIQUIDITY_REQUEST = 2
TYPE_ILQP_LIQUIDITY_RESPONSE = 3
TYPE_ILQP_BY_SOURCE_REQUEST = 4
TYPE_ILQP_BY_SOURCE_RESPONSE = 5
TYPE_ILQP_BY_DESTINATION_REQUEST = 6
TYPE_ILQP_BY_DESTINATION_RESPONSE = 7
TYPE_ILP_ERROR = 8

# 扩展字段占位字节
EXTENSIBILITY_NONE = 0x00


@dataclass(frozen=True)
class IlpPayment:
    """支付数据包"""
    account: str
    amount: int
    data: bytes = b''

    TYPE = TYPE_ILP_PAYMENT


@dataclass(frozen=True)
class IlqpLiquidityRequest:
    """流动性曲线报价请求"""
    destination_account: str
    destination_hold_duration: int

    TYPE = TYPE_ILQP_LIQUIDITY_REQUEST


@dataclass(frozen=True)
class IlqpLiquidityResponse:
    """流动性曲线报价响应"""
    liquidity_curve: List[Tuple[int, int]]
    applies_to_prefix: str
    source_hold_duration: int
    expires_at: datetime

    TYPE = TYPE_ILQP_LIQUIDITY_RESPONSE

    @property
    def response_type(self) -> int:
        return self.TYPE


@dataclass(frozen=True)
class IlqpBySourceRequest:
    """按源金额报价请求"""
    destination_account: str
    source_amount: int
    destination_hold_duration: int

    TYPE = TYPE_ILQP_BY_SOURCE_REQUEST


@dataclass(frozen=True)
class IlqpBySourceResponse:
    """按源金额报价响应"""
    destination_amount: int
    source_hold_duration: int

    TYPE = TYPE_ILQP_BY_SOURCE_RESPONSE

    @property
    def response_type(self) -> int:
        return self.TYPE


@dataclass(frozen=True)
class IlqpByDestinationRequest:
    """按目的金额报价请求"""
    destination_account: str
    destination_amount: int
    destination_hold_duration: int

    TYPE = TYPE_ILQP_BY_DESTINATION_REQUEST


@dataclass(frozen=True)
class IlqpByDestinationResponse:
    """按目的金额报价响应"""
    source_amount: int
    source_hold_duration: int

    TYPE = TYPE_ILQP_BY_DESTINATION_RESPONSE

    @property
    def response_type(self) -> int:
        return self.TYPE


@dataclass(frozen=True)
class IlpError:
    """应用层错误包"""
    code: str
    name: str
    triggered_by: str
    triggered_at: datetime
    forwarded_by: List[str] = field(default_factory=list)
    data: bytes = b''

    TYPE = TYPE_ILP_ERROR

    @property
    def response_type(self) -> int:
        return self.TYPE


IlpPacket = Union[
    IlpPayment,
    IlqpLiquidityRequest,
    IlqpLiquidityResponse,
    IlqpBySourceRequest,
    IlqpBySourceResponse,
    IlqpByDestinationRequest,
    IlqpByDestinationResponse,
    IlpError,
]


# ============================================================================
# 各类型数据包的正文编解码
# ============================================================================

def _write_payment(writer: Writer, packet: IlpPayment) -> None:
    writer.write_uint64(packet.amount, 'amount')
    writer.write_ascii(packet.account, 'account')
    writer.write_var_octet_string(packet.data)


def _read_payment(reader: Reader) -> IlpPayment:
    amount = reader.read_uint64()
    account = reader.read_ascii('account')
    data = reader.read_var_octet_string()
    return IlpPayment(account=account, amount=amount, data=data)


def _write_liquidity_request(writer: Writer, packet: IlqpLiquidityRequest) -> None:
    writer.write_ascii(packet.destination_account, 'destination_account')
    writer.write_uint32(packet.destination_hold_duration, 'destination_hold_duration')


def _read_liquidity_request(reader: Reader) -> IlqpLiquidityRequest:
    return IlqpLiquidityRequest(
        destination_account=reader.read_ascii('destination_account'),
        destination_hold_duration=reader.read_uint32()
    )


def _write_liquidity_response(writer: Writer, packet: IlqpLiquidityResponse) -> None:
    writer.write_var_uint(len(packet.liquidity_curve), 'liquidity_curve')
    for x, y in packet.liquidity_curve:
        writer.write_uint64(x, 'liquidity_curve.x')
        writer.write_uint64(y, 'liquidity_curve.y')
    writer.write_ascii(packet.applies_to_prefix, 'applies_to_prefix')
    writer.write_uint32(packet.source_hold_duration, 'source_hold_duration')
    writer.write_ascii(to_generalized_time(packet.expires_at), 'expires_at')


def _read_liquidity_response(reader: Reader) -> IlqpLiquidityResponse:
    point_count = reader.read_var_uint()
    # 每个点固定 16 字节
    if point_count * 16 > reader.remaining:
        raise PacketCodecError("Liquidity curve longer than packet", ErrorCodes.CODEC_TRUNCATED)
    curve = [(reader.read_uint64(), reader.read_uint64()) for _ in range(point_count)]
    applies_to_prefix = reader.read_ascii('applies_to_prefix')
    source_hold_duration = reader.read_uint32()
    expires_at = _read_time(reader, 'expires_at')
    return IlqpLiquidityResponse(
        liquidity_curve=curve,
        applies_to_prefix=applies_to_prefix,
        source_hold_duration=source_hold_duration,
        expires_at=expires_at
    )


def _write_by_source_request(writer: Writer, packet: IlqpBySourceRequest) -> None:
    writer.write_ascii(packet.destination_account, 'destination_account')
    writer.write_uint64(packet.source_amount, 'source_amount')
    writer.write_uint32(packet.destination_hold_duration, 'destination_hold_duration')


def _read_by_source_request(reader: Reader) -> IlqpBySourceRequest:
    return IlqpBySourceRequest(
        destination_account=reader.read_ascii('destination_account'),
        source_amount=reader.read_uint64(),
        destination_hold_duration=reader.read_uint32()
    )


def _write_by_source_response(writer: Writer, packet: IlqpBySourceResponse) -> None:
    writer.write_uint64(packet.destination_amount, 'destination_amount')
    writer.write_uint32(packet.source_hold_duration, 'source_hold_duration')


def _read_by_source_response(reader: Reader) -> IlqpBySourceResponse:
    return IlqpBySourceResponse(
        destination_amount=reader.read_uint64(),
        source_hold_duration=reader.read_uint32()
    )


def _write_by_destination_request(writer: Writer, packet: IlqpByDestinationRequest) -> None:
    writer.write_ascii(packet.destination_account, 'destination_account')
    writer.write_uint64(packet.destination_amount, 'destination_amount')
    writer.write_uint32(packet.destination_hold_duration, 'destination_hold_duration')


def _read_by_destination_request(reader: Reader) -> IlqpByDestinationRequest:
    return IlqpByDestinationRequest(
        destination_account=reader.read_ascii('destination_account'),
        destination_amount=reader.read_uint64(),
        destination_hold_duration=reader.read_uint32()
    )


def _write_by_destination_response(writer: Writer, packet: IlqpByDestinationResponse) -> None:
    writer.write_uint64(packet.source_amount, 'source_amount')
    writer.write_uint32(packet.source_hold_duration, 'source_hold_duration')


def _read_by_destination_response(reader: Reader) -> IlqpByDestinationResponse:
    return IlqpByDestinationResponse(
        source_amount=reader.read_uint64(),
        source_hold_duration=reader.read_uint32()
    )


def _write_error(writer: Writer, packet: IlpError) -> None:
    code = packet.code.encode('ascii') if isinstance(packet.code, str) else b''
    if len(code) != 3:
        raise PacketCodecError(f"Error code must be 3 ASCII characters: {packet.code!r}",
                               ErrorCodes.CODEC_INVALID_FIELD)
    writer.write_octets(code)
    writer.write_ascii(packet.name, 'name')
    writer.write_ascii(packet.triggered_by, 'triggered_by')
    writer.write_var_uint(len(packet.forwarded_by), 'forwarded_by')
    for address in packet.forwarded_by:
        writer.write_ascii(address, 'forwarded_by')
    writer.write_ascii(to_generalized_time(packet.triggered_at), 'triggered_at')
    writer.write_var_octet_string(packet.data)


def _read_error(reader: Reader) -> IlpError:
    try:
        code = reader.read_octets(3).decode('ascii')
    except UnicodeDecodeError as e:
        raise PacketCodecError("Error code is not valid ASCII",
                               ErrorCodes.CODEC_INVALID_FIELD) from e
    name = reader.read_ascii('name')
    triggered_by = reader.read_ascii('triggered_by')
    forwarded_count = reader.read_var_uint()
    if forwarded_count > reader.remaining:
        raise PacketCodecError("Forwarded-by list longer than packet", ErrorCodes.CODEC_TRUNCATED)
    forwarded_by = [reader.read_ascii('forwarded_by') for _ in range(forwarded_count)]
    triggered_at = _read_time(reader, 'triggered_at')
    data = reader.read_var_octet_string()
    return IlpError(
        code=code,
        name=name,
        triggered_by=triggered_by,
        forwarded_by=forwarded_by,
        triggered_at=triggered_at,
        data=data
    )


def _read_time(reader: Reader, field_name: str) -> datetime:
    text = reader.read_ascii(field_name)
    try:
        return parse_generalized_time(text)
    except ValueError as e:
        raise PacketCodecError(f"Invalid {field_name}: {text!r}",
                               ErrorCodes.CODEC_INVALID_FIELD) from e


# 类型码 -> (数据包类, 正文写入函数, 正文读取函数)
_CODECS: Dict[int, Tuple[Type, Callable, Callable]] = {
    TYPE_ILP_PAYMENT: (IlpPayment, _write_payment, _read_payment),
    TYPE_ILQP_LIQUIDITY_REQUEST: (IlqpLiquidityRequest, _write_liquidity_request, _read_liquidity_request),
    TYPE_ILQP_LIQUIDITY_RESPONSE: (IlqpLiquidityResponse, _write_liquidity_response, _read_liquidity_response),
    TYPE_ILQP_BY_SOURCE_REQUEST: (IlqpBySourceRequest, _write_by_source_request, _read_by_source_request),
    TYPE_ILQP_BY_SOURCE_RESPONSE: (IlqpBySourceResponse, _write_by_source_response, _read_by_source_response),
    TYPE_ILQP_BY_DESTINATION_REQUEST: (IlqpByDestinationRequest, _write_by_destination_request,
                                       _read_by_destination_request),
    TYPE_ILQP_BY_DESTINATION_RESPONSE: (IlqpByDestinationResponse, _write_by_destination_response,
                                        _read_by_destination_response),
    TYPE_ILP_ERROR: (IlpError, _write_error, _read_error),
}


# ============================================================================
# 公共接口
# ============================================================================

def serialize_packet(packet: IlpPacket) -> bytes:
    """序列化任意数据包，首字节为类型码"""
    packet_type = getattr(packet, 'TYPE', None)
    if packet_type not in _CODECS:
        raise PacketCodecError(f"Unsupported packet object: {type(packet).__name__}",
                               ErrorCodes.CODEC_UNKNOWN_TYPE)
    _, write_body, _ = _CODECS[packet_type]

    body = Writer()
    write_body(body, packet)
    body.write_uint8(EXTENSIBILITY_NONE)

    envelope = Writer()
    envelope.write_uint8(packet_type)
    envelope.write_var_octet_string(body.getvalue())
    return envelope.getvalue()


def deserialize_packet(buffer: bytes) -> IlpPacket:
    """反序列化数据包，根据首字节类型码选择解码器"""
    reader = Reader(buffer)
    packet_type = reader.read_uint8()
    if packet_type not in _CODECS:
        raise PacketCodecError(f"Unknown packet type: {packet_type}", ErrorCodes.CODEC_UNKNOWN_TYPE)
    contents = reader.read_var_octet_string()
    if reader.remaining:
        raise PacketCodecError(f"{reader.remaining} trailing bytes after packet",
                               ErrorCodes.CODEC_INVALID_FIELD)

    _, _, read_body = _CODECS[packet_type]
    body = Reader(contents)
    packet = read_body(body)
    # 扩展字段目前没有定义，读取后忽略
    body.read_uint8()
    codec_logger.debug(f"[Codec] Decoded {type(packet).__name__} ({len(contents)} bytes)")
    return packet


def packet_type_of(buffer: bytes) -> int:
    """读取原始数据包的类型码"""
    if not buffer:
        raise PacketCodecError("Empty packet", ErrorCodes.CODEC_TRUNCATED)
    return buffer[0]


def decode_base64_packet(encoded: str) -> bytes:
    """解码 base64 编码的数据包"""
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, TypeError, ValueError) as e:
        raise PacketCodecError(f"Packet is not valid base64: {e}",
                               ErrorCodes.CODEC_INVALID_FIELD) from e


def encode_base64_packet(buffer: bytes) -> str:
    """将数据包编码为 base64 字符串"""
    return base64.b64encode(buffer).decode('ascii')


def parse_payment(packet: Union[bytes, str]) -> IlpPayment:
    """解析支付数据包（原始字节或 base64 字符串）"""
    buffer = decode_base64_packet(packet) if isinstance(packet, str) else packet
    decoded = deserialize_packet(buffer)
    if not isinstance(decoded, IlpPayment):
        raise PacketCodecError(
            f"Expected payment packet, got type {packet_type_of(buffer)}",
            ErrorCodes.CODEC_UNKNOWN_TYPE
        )
    return decoded

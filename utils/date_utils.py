"""
Date and time utilities for the quote client.
Provides unit conversions between wire milliseconds and public seconds,
and the textual timestamp formats used on the wire and in results.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Union

from .exceptions import InvalidArgumentError, ErrorCodes

GENERALIZED_TIME_FORMAT = "%Y%m%d%H%M%S"

MILLISECONDS_PER_SECOND = 1000


def utc_now() -> datetime:
    """获取当前UTC时间"""
    return datetime.now(timezone.utc)


def to_iso_timestamp(dt: datetime) -> str:
    """格式化为带毫秒和 Z 后缀的 ISO-8601 时间"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def expires_after(milliseconds: int, now: datetime = None) -> str:
    """当前时间加上给定毫秒数后的 ISO-8601 时间"""
    start = now or utc_now()
    return to_iso_timestamp(start + timedelta(milliseconds=milliseconds))


def to_seconds(value: Union[str, int, float, Decimal]) -> Decimal:
    """把秒数（字符串或数字）解析为 Decimal"""
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Invalid duration: {value!r}", ErrorCodes.ARG_INVALID_DURATION)
    try:
        seconds = Decimal(str(value))
    except InvalidOperation as e:
        raise InvalidArgumentError(
            f"Invalid duration: {value!r}",
            ErrorCodes.ARG_INVALID_DURATION
        ) from e
    if not seconds.is_finite() or seconds < 0:
        raise InvalidArgumentError(f"Invalid duration: {value!r}", ErrorCodes.ARG_INVALID_DURATION)
    return seconds


def seconds_to_milliseconds(seconds: Decimal) -> int:
    """秒转毫秒（截断到整数毫秒）"""
    return int(seconds * MILLISECONDS_PER_SECOND)


def milliseconds_to_seconds(milliseconds: int) -> Decimal:
    """毫秒转秒"""
    return Decimal(milliseconds) / MILLISECONDS_PER_SECOND


def format_seconds(seconds: Decimal) -> str:
    """格式化秒数，去掉多余的零（20 -> "20", 1.5 -> "1.5"）"""
    normalized = seconds.normalize()
    return format(normalized, 'f')


def to_generalized_time(dt: datetime) -> str:
    """格式化为 generalized time (YYYYMMDDHHMMSS.fffZ)"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime(GENERALIZED_TIME_FORMAT) + f".{dt.microsecond // 1000:03d}Z"


def parse_generalized_time(value: str) -> datetime:
    """解析 generalized time，返回UTC时间"""
    if not value.endswith('Z'):
        raise ValueError(f"Generalized time must end with 'Z': {value!r}")
    body = value[:-1]
    whole, _, fraction = body.partition('.')
    dt = datetime.strptime(whole, GENERALIZED_TIME_FORMAT).replace(tzinfo=timezone.utc)
    if fraction:
        if not fraction.isdigit() or len(fraction) > 6:
            raise ValueError(f"Invalid fractional seconds: {value!r}")
        dt = dt.replace(microsecond=int(fraction.ljust(6, '0')))
    return dt

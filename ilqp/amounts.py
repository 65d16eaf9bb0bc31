"""
Ledger amount helpers.
Amounts are arbitrary-precision non-negative integers in the smallest ledger
unit; parsing and comparison use integer arithmetic only.
"""

from typing import Any, Optional, TypeVar, Union

from utils.exceptions import InvalidArgumentError, ErrorCodes

QuoteT = TypeVar('QuoteT')


def parse_amount(value: Union[str, int], field: str = 'amount') -> int:
    """把十进制整数字符串或整数解析为金额"""
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{field} must be a decimal integer, got {value!r}",
                                   ErrorCodes.ARG_INVALID_AMOUNT)
    if isinstance(value, int):
        if value < 0:
            raise InvalidArgumentError(f"{field} must not be negative, got {value}",
                                       ErrorCodes.ARG_INVALID_AMOUNT)
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    raise InvalidArgumentError(f"{field} must be a decimal integer string, got {value!r}",
                               ErrorCodes.ARG_INVALID_AMOUNT)


def _amount(quote: Any, field: str) -> Optional[int]:
    value = getattr(quote, field, None)
    return None if value is None else parse_amount(value, field)


def compare_quotes(first: QuoteT, second: QuoteT) -> QuoteT:
    """
    返回对付款方更有利的报价

    两个报价必须来自同一种查询：带源金额时源金额更小者胜，
    否则目的金额更大者胜；相等时保留第二个报价。
    """
    field = 'source_amount' if _amount(first, 'source_amount') is not None else 'destination_amount'
    first_amount = _amount(first, field)
    second_amount = _amount(second, field)
    if first_amount is None or second_amount is None:
        raise InvalidArgumentError(f"Cannot compare quotes without {field}",
                                   ErrorCodes.ARG_INVALID_AMOUNT)

    if field == 'source_amount':
        better = first_amount < second_amount
    else:
        better = first_amount > second_amount
    return first if better else second

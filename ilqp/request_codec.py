"""
Quote request codec adapter.
Picks the wire shape for a query from which amount it fixes.
"""

from typing import Tuple

from codec import (
    IlqpByDestinationRequest,
    IlqpBySourceRequest,
    IlqpLiquidityRequest,
    packet_type_of,
    serialize_packet,
)
from .models import QuoteQuery


def build_quote_request(query: QuoteQuery):
    """根据查询中给出的金额选择请求类型"""
    if query.source_amount is not None:
        return IlqpBySourceRequest(
            destination_account=query.destination_account,
            source_amount=query.source_amount,
            destination_hold_duration=query.destination_hold_duration
        )
    if query.destination_amount is not None:
        return IlqpByDestinationRequest(
            destination_account=query.destination_account,
            destination_amount=query.destination_amount,
            destination_hold_duration=query.destination_hold_duration
        )
    return IlqpLiquidityRequest(
        destination_account=query.destination_account,
        destination_hold_duration=query.destination_hold_duration
    )


def encode_quote_request(query: QuoteQuery) -> Tuple[bytes, int]:
    """编码报价请求，返回 (数据包, 请求类型码)"""
    packet = serialize_packet(build_quote_request(query))
    return packet, packet_type_of(packet)

"""
Packet codec for the quote client.
Provides OER primitives and ILP payment / ILQP / error packet serialization.
"""

from .ilp_packet import (
    TYPE_ILP_PAYMENT,
    TYPE_ILQP_LIQUIDITY_REQUEST,
    TYPE_ILQP_LIQUIDITY_RESPONSE,
    TYPE_ILQP_BY_SOURCE_REQUEST,
    TYPE_ILQP_BY_SOURCE_RESPONSE,
    TYPE_ILQP_BY_DESTINATION_REQUEST,
    TYPE_ILQP_BY_DESTINATION_RESPONSE,
    TYPE_ILP_ERROR,
    IlpPacket,
    IlpPayment,
    IlqpLiquidityRequest,
    IlqpLiquidityResponse,
    IlqpBySourceRequest,
    IlqpBySourceResponse,
    IlqpByDestinationRequest,
    IlqpByDestinationResponse,
    IlpError,
    serialize_packet,
    deserialize_packet,
    packet_type_of,
    decode_base64_packet,
    encode_base64_packet,
    parse_payment,
)

__all__ = [
    'TYPE_ILP_PAYMENT',
    'TYPE_ILQP_LIQUIDITY_REQUEST',
    'TYPE_ILQP_LIQUIDITY_RESPONSE',
    'TYPE_ILQP_BY_SOURCE_REQUEST',
    'TYPE_ILQP_BY_SOURCE_RESPONSE',
    'TYPE_ILQP_BY_DESTINATION_REQUEST',
    'TYPE_ILQP_BY_DESTINATION_RESPONSE',
    'TYPE_ILP_ERROR',
    'IlpPacket',
    'IlpPayment',
    'IlqpLiquidityRequest',
    'IlqpLiquidityResponse',
    'IlqpBySourceRequest',
    'IlqpBySourceResponse',
    'IlqpByDestinationRequest',
    'IlqpByDestinationResponse',
    'IlpError',
    'serialize_packet',
    'deserialize_packet',
    'packet_type_of',
    'decode_base64_packet',
    'encode_base64_packet',
    'parse_payment',
]

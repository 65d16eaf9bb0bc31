"""
Quote orchestrator.
Validates a quote request, short-circuits destinations on the transport's own
ledger and otherwise asks the connector, then normalizes the result.
"""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from codec import IlpError, IlqpByDestinationResponse, IlqpBySourceResponse, parse_payment
from transport.base_transport import BaseTransport, safe_connect
from utils import ilqp_logger
from utils.address_utils import is_local_address
from utils.config_manager import QuoteConfig
from utils.date_utils import (
    expires_after,
    format_seconds,
    milliseconds_to_seconds,
    seconds_to_milliseconds,
    to_seconds,
)
from utils.exceptions import (
    EmptyResponseError,
    ErrorCodes,
    InvalidArgumentError,
    ProtocolViolationError,
    RemoteQuoteError,
)
from .connector import quote_by_connector
from .models import Quote, QuoteParams, QuoteQuery


# 字段名 -> 校验失败时的错误代码
_FIELD_ERROR_CODES = {
    'source_address': ErrorCodes.ARG_INVALID_ADDRESS,
    'destination_address': ErrorCodes.ARG_INVALID_ADDRESS,
    'source_amount': ErrorCodes.ARG_INVALID_AMOUNT,
    'destination_amount': ErrorCodes.ARG_INVALID_AMOUNT,
    'destination_expiry_duration': ErrorCodes.ARG_INVALID_DURATION,
    'timeout': ErrorCodes.ARG_INVALID_TIMEOUT,
}


def _error_code_for(error: ValidationError) -> str:
    """按第一个失败字段选择错误代码（支持别名）"""
    errors = error.errors()
    if not errors or not errors[0]['loc']:
        return ErrorCodes.ARG_INVALID
    location = errors[0]['loc'][0]
    for name, field_info in QuoteParams.model_fields.items():
        if location in (name, field_info.alias):
            return _FIELD_ERROR_CODES.get(name, ErrorCodes.ARG_INVALID)
    return ErrorCodes.ARG_INVALID


def _coerce_params(query: Union[QuoteParams, Mapping[str, Any]]) -> QuoteParams:
    """把调用参数转换为 QuoteParams"""
    if isinstance(query, QuoteParams):
        return query
    try:
        return QuoteParams.model_validate(dict(query))
    except ValidationError as e:
        raise InvalidArgumentError(
            f"Invalid quote parameters: {e}",
            _error_code_for(e)
        ) from e


async def quote(transport: BaseTransport, query: Union[QuoteParams, Mapping[str, Any]],
                config: Optional[QuoteConfig] = None) -> Quote:
    """
    计算一笔转账的报价

    Args:
        transport: 传输（未连接时会先连接）
        query: QuoteParams 或等价的字典（支持 snake_case 与 camelCase 键）
        config: 报价配置，省略时使用默认值

    Returns:
        Quote: 本地目的地返回 1:1 报价，否则返回连接器报价
    """
    config = config or QuoteConfig()
    params = _coerce_params(query)

    if (params.source_amount is None) == (params.destination_amount is None):
        raise InvalidArgumentError(
            "should provide source or destination amount but not both",
            ErrorCodes.ARG_AMOUNT_REQUIRED,
            context={
                'source_amount': params.source_amount,
                'destination_amount': params.destination_amount
            }
        )

    await safe_connect(transport, params.timeout)
    prefix = transport.get_info().get('prefix')
    fixed_source = params.source_amount is not None
    amount = params.source_amount if fixed_source else params.destination_amount
    destination_hold_duration = (
        params.destination_expiry_duration
        if params.destination_expiry_duration is not None
        else to_seconds(config.expiry_duration)
    )

    if is_local_address(prefix, params.destination_address):
        ilqp_logger.info(f"[ILQP] Returning a local transfer to {params.destination_address} for {amount}")
        return Quote(
            connector_account=params.destination_address,
            source_amount=str(amount),
            destination_amount=str(amount),
            source_expiry_duration=format_seconds(destination_hold_duration)
        )

    quote_query = QuoteQuery(
        destination_account=params.destination_address,
        destination_hold_duration=seconds_to_milliseconds(destination_hold_duration),
        source_amount=params.source_amount,
        destination_amount=params.destination_amount
    )
    ilqp_logger.info(
        f"[ILQP] Quoting {amount} ({'source' if fixed_source else 'destination'} amount) "
        f"to {params.destination_address}"
    )

    response = await quote_by_connector(transport, quote_query, timeout=params.timeout, config=config)

    if response is None:
        raise EmptyResponseError(f"got empty quote response: {response}", ErrorCodes.QUOTE_EMPTY_RESPONSE)
    if isinstance(response, IlpError):
        raise RemoteQuoteError(
            f"remote quote error: {response.name}",
            ilp_error=response,
            error_code=ErrorCodes.QUOTE_REMOTE_ERROR,
            context={'code': response.code, 'triggered_by': response.triggered_by}
        )

    if fixed_source and isinstance(response, IlqpBySourceResponse):
        source_amount, destination_amount = params.source_amount, response.destination_amount
    elif not fixed_source and isinstance(response, IlqpByDestinationResponse):
        source_amount, destination_amount = response.source_amount, params.destination_amount
    else:
        raise ProtocolViolationError(
            f"Unexpected quote response: {type(response).__name__}",
            ErrorCodes.QUOTE_INCORRECT_TYPE
        )

    ilqp_logger.debug(f"[ILQP] Got quote: {response}")
    return Quote(
        source_amount=str(source_amount),
        destination_amount=str(destination_amount),
        source_expiry_duration=format_seconds(milliseconds_to_seconds(response.source_hold_duration)),
        # 当前时间加上源端持有时长
        expires_at=expires_after(response.source_hold_duration)
    )


async def quote_by_packet(transport: BaseTransport, packet: Union[bytes, str],
                          params: Optional[Mapping[str, Any]] = None,
                          config: Optional[QuoteConfig] = None) -> Quote:
    """按已编码的支付数据包报价，数据包中的账户和金额优先于调用参数"""
    payment = parse_payment(packet)
    query: Dict[str, Any] = {
        key: value for key, value in (params or {}).items()
        if key not in ('destination_address', 'destinationAddress',
                       'destination_amount', 'destinationAmount')
    }
    query['destination_address'] = payment.account
    query['destination_amount'] = payment.amount
    return await quote(transport, query, config=config)

"""
ILQP data models.
QuoteParams and Quote are the public input/output models; QuoteQuery is the
wire-level query handed to the connector exchange.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from codec import IlpError, IlqpByDestinationResponse, IlqpBySourceResponse, IlqpLiquidityResponse
from utils.address_utils import is_valid_address
from utils.date_utils import to_seconds
from utils.exceptions import InvalidArgumentError, ErrorCodes
from .amounts import parse_amount


# 连接器响应：成功响应的三种形态或错误包
ConnectorResponse = Union[
    IlqpBySourceResponse,
    IlqpByDestinationResponse,
    IlqpLiquidityResponse,
    IlpError,
]


@dataclass(frozen=True)
class QuoteQuery:
    """发送给连接器的报价查询"""
    destination_account: str
    destination_hold_duration: int  # 毫秒
    source_amount: Optional[int] = None
    destination_amount: Optional[int] = None

    def __post_init__(self):
        if self.source_amount is not None and self.destination_amount is not None:
            raise InvalidArgumentError(
                "Quote query cannot fix both source and destination amount",
                ErrorCodes.ARG_AMOUNT_REQUIRED
            )


class QuoteParams(BaseModel):
    """报价请求参数"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    source_address: Optional[str] = Field(None, alias="sourceAddress", description="付款方地址")
    destination_address: str = Field(..., alias="destinationAddress", description="收款方地址")
    source_amount: Optional[int] = Field(None, alias="sourceAmount", description="固定的源金额")
    destination_amount: Optional[int] = Field(None, alias="destinationAmount", description="固定的目的金额")
    destination_expiry_duration: Optional[Decimal] = Field(
        None, alias="destinationExpiryDuration", description="目的端转账持有时长（秒）"
    )
    timeout: Optional[int] = Field(None, description="超时时间（毫秒）", gt=0)

    @field_validator('source_amount', 'destination_amount', mode='before')
    @classmethod
    def validate_amount(cls, value: Any, info):
        if value is None:
            return None
        return parse_amount(value, info.field_name)

    @field_validator('destination_address')
    @classmethod
    def validate_destination(cls, value: str):
        if not is_valid_address(value):
            raise ValueError(f"invalid destination address: {value!r}")
        return value

    @field_validator('destination_expiry_duration', mode='before')
    @classmethod
    def validate_expiry(cls, value: Any):
        if value is None:
            return None
        return to_seconds(value)


class Quote(BaseModel):
    """报价结果"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    connector_account: Optional[str] = Field(None, alias="connectorAccount", description="下一跳账户")
    source_amount: Optional[str] = Field(None, alias="sourceAmount", description="源金额")
    destination_amount: Optional[str] = Field(None, alias="destinationAmount", description="目的金额")
    source_expiry_duration: Optional[str] = Field(
        None, alias="sourceExpiryDuration", description="源端转账持有时长（秒）"
    )
    expires_at: Optional[str] = Field(None, alias="expiresAt", description="报价过期时间 (ISO-8601)")

    def to_dict(self) -> Dict[str, str]:
        """转换为字典，省略未计算的字段"""
        return self.model_dump(by_alias=True, exclude_none=True)

"""
Test data factories for Quote Client tests
Provides factories for building wire packets and transport replies
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from faker import Faker

from codec import (
    IlpError,
    IlpPayment,
    IlqpByDestinationResponse,
    IlqpBySourceResponse,
    IlqpLiquidityResponse,
    encode_base64_packet,
    serialize_packet,
)

# Initialize faker
fake = Faker()
Faker.seed(4321)


class AddressFactory:
    """Factory for creating ledger addresses"""

    @staticmethod
    def create_account(prefix: str = "g.eur.") -> str:
        """Create an account address under a ledger prefix"""
        name = ''.join(ch for ch in fake.user_name().lower() if ch.isalnum()) or "account"
        return f"{prefix}{name}"


class PacketFactory:
    """Factory for creating serialized packets"""

    @staticmethod
    def by_source_response(destination_amount: int = 9, source_hold_duration: int = 20000) -> bytes:
        return serialize_packet(IlqpBySourceResponse(
            destination_amount=destination_amount,
            source_hold_duration=source_hold_duration
        ))

    @staticmethod
    def by_destination_response(source_amount: int = 11, source_hold_duration: int = 20000) -> bytes:
        return serialize_packet(IlqpByDestinationResponse(
            source_amount=source_amount,
            source_hold_duration=source_hold_duration
        ))

    @staticmethod
    def liquidity_response(curve: List = None, source_hold_duration: int = 20000) -> bytes:
        return serialize_packet(IlqpLiquidityResponse(
            liquidity_curve=curve or [(0, 0), (1000, 900)],
            applies_to_prefix="g.eur.",
            source_hold_duration=source_hold_duration,
            expires_at=datetime(2026, 1, 1, tzinfo=timezone.utc)
        ))

    @staticmethod
    def error(name: str = "Unreachable", code: str = "F02",
              triggered_by: str = "g.usd.connector") -> bytes:
        return serialize_packet(IlpError(
            code=code,
            name=name,
            triggered_by=triggered_by,
            forwarded_by=["g.usd.connector2"],
            triggered_at=datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
            data=b'no route'
        ))

    @staticmethod
    def payment(account: str = "g.eur.bob", amount: int = 500, data: bytes = b'') -> bytes:
        return serialize_packet(IlpPayment(account=account, amount=amount, data=data))


class TransportReplyFactory:
    """Factory for creating transport replies"""

    @staticmethod
    def create_reply(packet: bytes) -> Dict[str, Any]:
        """Wrap a packet the way a transport returns it"""
        return {'ilp': encode_base64_packet(packet)}

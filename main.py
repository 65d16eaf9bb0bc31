"""
Main entry point for the quote client.
Provides a command-line interface for quoting over the HTTP transport.
"""

import asyncio
import argparse
import json
import sys
from dataclasses import replace
from typing import Any, Dict, List, Optional

from utils import ilqp_logger, config_manager, create_error_response, QuoteClientError
from ilqp import quote, quote_by_packet
from transport import HttpTransport


class QuoteClient:
    """报价客户端主类"""

    def __init__(self, endpoint: Optional[str] = None, prefix: Optional[str] = None):
        self.quote_config = config_manager.get_quote_config()
        transport_config = config_manager.get_transport_config()
        if endpoint:
            transport_config = replace(transport_config, endpoint=endpoint)
        if prefix:
            transport_config = replace(transport_config, prefix=prefix)
        self.transport = HttpTransport(transport_config)

    async def quote(self, params: Dict[str, Any]) -> Dict[str, str]:
        """按参数报价"""
        result = await quote(self.transport, params, config=self.quote_config)
        return result.to_dict()

    async def quote_packet(self, packet: str, params: Dict[str, Any]) -> Dict[str, str]:
        """按支付数据包报价"""
        result = await quote_by_packet(self.transport, packet, params, config=self.quote_config)
        return result.to_dict()

    async def close(self):
        await self.transport.close()


def create_parser():
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        description="ILQP Quote Client - 跨账本转账报价工具",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  python main.py quote --destination g.eur.bob --destination-amount 500
  python main.py quote --destination g.eur.bob --source-amount 100 --expiry 30
  python main.py quote-packet --packet ARQAAAAAAAAB9AlnLmV1ci5ib2IAAA==
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    # 公共参数
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--source', type=str, help='付款方地址')
    common.add_argument('--expiry', type=str, help='目的端持有时长（秒，默认读取配置）')
    common.add_argument('--timeout', type=int, help='超时时间（毫秒）')
    common.add_argument('--endpoint', type=str, help='连接器地址（默认读取配置）')
    common.add_argument('--prefix', type=str, help='本方账本前缀（默认读取配置）')

    quote_parser = subparsers.add_parser('quote', parents=[common], help='按金额报价')
    quote_parser.add_argument('--destination', required=True, help='收款方地址')
    amount_group = quote_parser.add_mutually_exclusive_group(required=True)
    amount_group.add_argument('--source-amount', type=str, help='固定源金额')
    amount_group.add_argument('--destination-amount', type=str, help='固定目的金额')

    packet_parser = subparsers.add_parser('quote-packet', parents=[common], help='按支付数据包报价')
    packet_parser.add_argument('--packet', required=True, help='base64 编码的支付数据包')

    return parser


def build_params(args: argparse.Namespace) -> Dict[str, Any]:
    """从命令行参数构造报价参数，未给出的字段不传"""
    params = {
        'source_address': args.source,
        'destination_expiry_duration': args.expiry,
        'timeout': args.timeout,
    }
    if args.command == 'quote':
        params.update({
            'destination_address': args.destination,
            'source_amount': args.source_amount,
            'destination_amount': args.destination_amount,
        })
    return {key: value for key, value in params.items() if value is not None}


async def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    client = QuoteClient(endpoint=args.endpoint, prefix=args.prefix)
    try:
        params = build_params(args)
        if args.command == 'quote':
            result = await client.quote(params)
        else:
            result = await client.quote_packet(args.packet, params)
        print(json.dumps(result, indent=2))
        return 0

    except QuoteClientError as e:
        ilqp_logger.error(f"[Main] Quote failed: {e}")
        print(json.dumps(create_error_response(e), indent=2, default=str))
        return 1
    finally:
        await client.close()


def run():
    """命令行入口"""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()

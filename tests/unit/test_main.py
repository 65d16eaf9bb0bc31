"""
Unit tests for the command-line entry point
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from main import QuoteClient, build_params, create_parser, main
from utils.exceptions import RemoteQuoteError, ErrorCodes


@pytest.mark.unit
class TestParser:
    """Test cases for argument parsing"""

    def test_quote_by_destination_amount(self):
        """Test the quote command collects its parameters"""
        args = create_parser().parse_args([
            'quote', '--destination', 'g.eur.bob', '--destination-amount', '500', '--expiry', '30'
        ])

        assert build_params(args) == {
            'destination_address': 'g.eur.bob',
            'destination_amount': '500',
            'destination_expiry_duration': '30',
        }

    def test_quote_with_timeout_and_source(self):
        """Test optional common parameters are passed through"""
        args = create_parser().parse_args([
            'quote', '--destination', 'g.eur.bob', '--source-amount', '100',
            '--source', 'test.local.alice', '--timeout', '2000'
        ])

        assert build_params(args) == {
            'source_address': 'test.local.alice',
            'timeout': 2000,
            'destination_address': 'g.eur.bob',
            'source_amount': '100',
        }

    def test_amounts_are_mutually_exclusive(self):
        """Test the parser refuses both amounts"""
        with pytest.raises(SystemExit):
            create_parser().parse_args([
                'quote', '--destination', 'g.eur.bob',
                '--source-amount', '1', '--destination-amount', '1'
            ])

    def test_quote_packet(self):
        """Test the packet command leaves destination fields to the packet"""
        args = create_parser().parse_args(['quote-packet', '--packet', 'ARQAAAAAAAAB9AlnLmV1ci5ib2IAAA=='])

        assert args.packet == 'ARQAAAAAAAAB9AlnLmV1ci5ib2IAAA=='
        assert build_params(args) == {}


@pytest.mark.unit
class TestQuoteClient:
    """Test cases for QuoteClient"""

    def test_overrides(self):
        """Test endpoint and prefix overrides replace configured values"""
        client = QuoteClient(endpoint="http://other.test/ilp", prefix="g.usd.")

        assert client.transport.config.endpoint == "http://other.test/ilp"
        assert client.transport.get_info() == {'prefix': "g.usd."}


@pytest.mark.unit
class TestMain:
    """Test cases for main"""

    @pytest.mark.asyncio
    async def test_prints_quote(self, capsys):
        """Test a successful quote is printed as JSON"""
        result = {'sourceAmount': "100", 'destinationAmount': "9"}
        with patch.object(QuoteClient, 'quote', new=AsyncMock(return_value=result)), \
                patch.object(QuoteClient, 'close', new=AsyncMock()) as mock_close:
            code = await main(['quote', '--destination', 'g.eur.bob', '--source-amount', '100'])

        assert code == 0
        assert json.loads(capsys.readouterr().out) == result
        mock_close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_prints_error(self, capsys):
        """Test library errors are printed and give a non-zero exit code"""
        error = RemoteQuoteError("remote quote error: Unreachable",
                                 error_code=ErrorCodes.QUOTE_REMOTE_ERROR)
        with patch.object(QuoteClient, 'quote_packet', new=AsyncMock(side_effect=error)), \
                patch.object(QuoteClient, 'close', new=AsyncMock()) as mock_close:
            code = await main(['quote-packet', '--packet', 'ARQAAAAAAAAB9AlnLmV1ci5ib2IAAA=='])

        assert code == 1
        output = json.loads(capsys.readouterr().out)
        assert output['error'] is True
        assert output['error_code'] == ErrorCodes.QUOTE_REMOTE_ERROR
        assert output['message'] == "remote quote error: Unreachable"
        mock_close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_command(self, capsys):
        """Test running without a command prints help"""
        assert await main([]) == 0
        assert "quote" in capsys.readouterr().out

"""
Unit tests for HttpTransport
"""

import asyncio

import aiohttp
import pytest
import pytest_asyncio

from codec import decode_base64_packet, encode_base64_packet
from transport import HttpTransport
from utils.exceptions import ErrorCodes, TransportError
from tests.factories import PacketFactory
from tests.mocks import MockHTTPContext

ENDPOINT = "http://connector.test/ilp"


@pytest_asyncio.fixture
async def http_transport(transport_config):
    """Connected HTTP transport"""
    transport = HttpTransport(transport_config)
    await transport.connect()
    yield transport
    await transport.close()


@pytest.mark.unit
class TestHttpTransport:
    """Test cases for HttpTransport"""

    def test_get_info(self, transport_config):
        """Test the ledger prefix comes from config"""
        assert HttpTransport(transport_config).get_info() == {'prefix': "test.alice."}

    @pytest.mark.asyncio
    async def test_send_request(self, http_transport):
        """Test the packet is posted and the reply body returned"""
        reply = PacketFactory.by_source_response()
        request = PacketFactory.payment()

        with MockHTTPContext() as http:
            http.configure_packet(ENDPOINT, reply)
            result = await http_transport.send_request({
                'ilp': encode_base64_packet(request),
                'timeout': 1000
            })

            calls = http.requests_to(ENDPOINT)

        assert decode_base64_packet(result['ilp']) == reply
        assert len(calls) == 1
        assert calls[0].kwargs['data'] == request

    @pytest.mark.asyncio
    async def test_request_headers(self, http_transport):
        """Test the content type and timeout headers are sent"""
        with MockHTTPContext() as http:
            http.configure_packet(ENDPOINT, PacketFactory.by_source_response())
            await http_transport.send_request({
                'ilp': encode_base64_packet(PacketFactory.payment()),
                'timeout': 1500
            })

            headers = http.requests_to(ENDPOINT)[0].kwargs['headers']

        assert headers['Content-Type'] == "application/octet-stream"
        assert headers['ILP-Timeout'] == "1500"

    @pytest.mark.asyncio
    async def test_bad_status(self, http_transport):
        """Test non-2xx replies raise TransportError"""
        with MockHTTPContext() as http:
            http.configure_packet(ENDPOINT, b'oops', status=502)

            with pytest.raises(TransportError) as exc_info:
                await http_transport.send_request({
                    'ilp': encode_base64_packet(PacketFactory.payment()),
                    'timeout': 1000
                })

        assert exc_info.value.error_code == ErrorCodes.NETWORK_BAD_STATUS
        assert exc_info.value.context == {'status': 502}

    @pytest.mark.asyncio
    async def test_connection_error(self, http_transport):
        """Test client errors raise TransportError"""
        with MockHTTPContext() as http:
            http.configure_exception(ENDPOINT, aiohttp.ClientConnectionError("refused"))

            with pytest.raises(TransportError) as exc_info:
                await http_transport.send_request({
                    'ilp': encode_base64_packet(PacketFactory.payment()),
                    'timeout': 1000
                })

        assert exc_info.value.error_code == ErrorCodes.NETWORK_CONNECTION_ERROR

    @pytest.mark.asyncio
    async def test_timeout_propagates(self, http_transport):
        """Test request timeouts are left to the caller"""
        with MockHTTPContext() as http:
            http.configure_exception(ENDPOINT, asyncio.TimeoutError())

            with pytest.raises(asyncio.TimeoutError):
                await http_transport.send_request({
                    'ilp': encode_base64_packet(PacketFactory.payment()),
                    'timeout': 1000
                })

    @pytest.mark.asyncio
    async def test_not_connected(self, transport_config):
        """Test sending before connecting fails"""
        transport = HttpTransport(transport_config)

        with pytest.raises(TransportError):
            await transport.send_request({'ilp': encode_base64_packet(PacketFactory.payment())})

    @pytest.mark.asyncio
    async def test_close(self, transport_config):
        """Test closing releases the session"""
        transport = HttpTransport(transport_config)
        await transport.connect()

        await transport.close()

        assert transport.aio_session is None
        assert not transport.is_connected()

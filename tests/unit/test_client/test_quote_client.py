"""
Unit tests for the quote client and the client command
"""

import asyncio
import time

import aiohttp
import pytest
from aioresponses import aioresponses

from client.quote_client import QuoteClient, format_output
from main import main
from tests.factories import SERVER_URL
from utils.config_manager import ClientConfig
from utils.exceptions import ClientError, ErrorCodes


@pytest.mark.unit
class TestQuoteClient:
    """Test cases for QuoteClient"""

    @pytest.fixture
    def output_file(self, temp_dir):
        return temp_dir / "cotacao.txt"

    @pytest.fixture
    def quote_client(self, output_file):
        config = ClientConfig(server_url=SERVER_URL, timeout=0.3, output_file=str(output_file))
        return QuoteClient(config=config)

    def test_format_output(self):
        assert format_output("5.43") == "Dólar: 5.43"

    def test_defaults_from_config(self):
        quote_client = QuoteClient()
        assert quote_client.server_url == "http://localhost:8080/cotacao"
        assert quote_client.timeout == 0.3
        assert quote_client.output_file.name == "cotacao.txt"

    def test_arguments_override_config(self, temp_dir):
        quote_client = QuoteClient(
            server_url=SERVER_URL, timeout=1.5, output_file=str(temp_dir / "out.txt")
        )
        assert quote_client.server_url == SERVER_URL
        assert quote_client.timeout == 1.5
        assert quote_client.output_file == temp_dir / "out.txt"

    @pytest.mark.asyncio
    async def test_run_writes_bid_to_file(self, quote_client, output_file):
        with aioresponses() as mocked:
            mocked.get(SERVER_URL, payload={"bid": "5.43"})
            content = await quote_client.run()

        assert content == "Dólar: 5.43"
        assert output_file.read_text(encoding="utf-8") == "Dólar: 5.43"

    @pytest.mark.asyncio
    async def test_run_overwrites_previous_contents(self, quote_client, output_file):
        output_file.write_text("Dólar: 4.99\nold line\n", encoding="utf-8")

        with aioresponses() as mocked:
            mocked.get(SERVER_URL, payload={"bid": "5.43"})
            await quote_client.run()

        assert output_file.read_text(encoding="utf-8") == "Dólar: 5.43"

    @pytest.mark.asyncio
    async def test_non_200_is_fatal(self, quote_client, output_file):
        with aioresponses() as mocked:
            mocked.get(SERVER_URL, status=502, body="upstream API failure")
            with pytest.raises(ClientError) as exc_info:
                await quote_client.run()

        assert exc_info.value.error_code == ErrorCodes.CLIENT_BAD_STATUS
        assert not output_file.exists()

    @pytest.mark.asyncio
    async def test_timeout_is_fatal(self, quote_client, output_file):
        with aioresponses() as mocked:
            mocked.get(SERVER_URL, exception=asyncio.TimeoutError())
            with pytest.raises(ClientError) as exc_info:
                await quote_client.run()

        assert exc_info.value.error_code == ErrorCodes.CLIENT_TIMEOUT
        assert not output_file.exists()

    @pytest.mark.asyncio
    async def test_connection_error_is_fatal(self, quote_client):
        with aioresponses() as mocked:
            mocked.get(SERVER_URL, exception=aiohttp.ClientConnectionError("refused"))
            with pytest.raises(ClientError) as exc_info:
                await quote_client.fetch_bid()

        assert exc_info.value.error_code == ErrorCodes.CLIENT_CONNECTION_ERROR

    @pytest.mark.asyncio
    async def test_malformed_body_is_fatal(self, quote_client):
        with aioresponses() as mocked:
            mocked.get(SERVER_URL, body="not json")
            with pytest.raises(ClientError) as exc_info:
                await quote_client.fetch_bid()

        assert exc_info.value.error_code == ErrorCodes.CLIENT_INVALID_RESPONSE

    @pytest.mark.asyncio
    async def test_empty_bid_is_fatal(self, quote_client, output_file):
        with aioresponses() as mocked:
            mocked.get(SERVER_URL, payload={"bid": ""})
            with pytest.raises(ClientError) as exc_info:
                await quote_client.run()

        assert exc_info.value.error_code == ErrorCodes.CLIENT_INVALID_RESPONSE
        assert not output_file.exists()

    @pytest.mark.asyncio
    async def test_deadline_applies_to_slow_server(self, slow_peer, output_file):
        quote_client = QuoteClient(
            server_url=str(slow_peer.make_url("/cotacao")), timeout=0.3, output_file=str(output_file)
        )
        start = time.monotonic()
        with pytest.raises(ClientError) as exc_info:
            await quote_client.run()

        assert exc_info.value.error_code == ErrorCodes.CLIENT_TIMEOUT
        assert time.monotonic() - start < 0.9
        assert not output_file.exists()

    @pytest.mark.asyncio
    async def test_generous_deadline_waits_for_slow_server(self, slow_peer, output_file):
        quote_client = QuoteClient(
            server_url=str(slow_peer.make_url("/cotacao")), timeout=5.0, output_file=str(output_file)
        )
        await quote_client.run()

        assert output_file.read_text(encoding="utf-8") == "Dólar: 5.43"

    def test_write_failure_is_fatal(self, temp_dir):
        quote_client = QuoteClient(
            server_url=SERVER_URL, output_file=str(temp_dir / "missing" / "cotacao.txt")
        )
        with pytest.raises(ClientError) as exc_info:
            quote_client.write_bid("5.43")

        assert exc_info.value.error_code == ErrorCodes.CLIENT_WRITE_FAILED


@pytest.mark.unit
class TestClientCommand:
    """Test cases for `main.py client`"""

    @pytest.mark.asyncio
    async def test_client_command_writes_file(self, temp_dir):
        output_file = temp_dir / "cotacao.txt"
        with aioresponses() as mocked:
            mocked.get(SERVER_URL, payload={"bid": "5.43"})
            await main(["client", "--url", SERVER_URL, "--output", str(output_file)])

        assert output_file.read_text(encoding="utf-8") == "Dólar: 5.43"

    @pytest.mark.asyncio
    async def test_client_command_exits_nonzero_on_failure(self, temp_dir):
        with aioresponses() as mocked:
            mocked.get(SERVER_URL, status=504, body="upstream API timeout")
            with pytest.raises(SystemExit) as exc_info:
                await main(["client", "--url", SERVER_URL, "--output", str(temp_dir / "c.txt")])

        assert exc_info.value.code == 1

import base64
from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs

import httpx
import pytest

from adapters.charge import ChargeClient
from conftest import CHARGE_URL, no_network
from core.domain.errors import (
    ConfigurationError,
    CredentialReadError,
    TransportError,
    UnsupportedOperation,
)
from core.domain.models import InvoiceRequest, LightningInvoiceStatus, NodeInfo, OpenChannelRequest
from core.interfaces.lightning import LightningClient

EXPECTED_AUTH = "Basic " + base64.b64encode(b"api-token:secret").decode()


class TestCreateInvoice:
    @pytest.mark.asyncio
    async def test_posts_form_and_synthesizes_unpaid_invoice(self, make_client):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["form"] = parse_qs(request.content.decode())
            # status/expiry returned by the server are ignored at creation
            return httpx.Response(200, json={"id": "abc", "payreq": "lnbc...", "status": "paid"})

        client = make_client(handler)
        before = datetime.now(timezone.utc)

        invoice = await client.create_invoice(1000, "coffee", timedelta(seconds=60))

        after = datetime.now(timezone.utc)
        assert seen["method"] == "POST"
        assert seen["url"] == "https://charge.test/invoice"
        assert seen["auth"] == EXPECTED_AUTH
        assert seen["form"] == {"msatoshi": ["1000"], "expiry": ["60"], "description": ["coffee"]}
        assert invoice.id == "abc"
        assert invoice.bolt11 == "lnbc..."
        assert invoice.amount == 1000
        assert invoice.status is LightningInvoiceStatus.UNPAID
        assert invoice.paid_at is None
        assert before + timedelta(seconds=60) <= invoice.expires_at <= after + timedelta(seconds=60)

    @pytest.mark.asyncio
    async def test_description_not_sent_when_none(self, make_client):
        forms = []

        def handler(request: httpx.Request) -> httpx.Response:
            forms.append(parse_qs(request.content.decode()))
            return httpx.Response(201, json={"id": "abc", "payreq": "lnbc..."})

        client = make_client(handler)

        await client.create_invoice(5, None, timedelta(hours=1))

        assert forms == [{"msatoshi": ["5"], "expiry": ["3600"]}]

    @pytest.mark.asyncio
    async def test_server_error_is_transport_error(self, make_client):
        client = make_client(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(TransportError) as excinfo:
            await client.create_invoice(5, None, timedelta(hours=1))

        assert excinfo.value.status_code == 500

    @pytest.mark.asyncio
    async def test_native_create_returns_charge_record(self, make_client):
        client = make_client(
            lambda request: httpx.Response(200, json={"id": "abc", "payreq": "lnbc...", "msatoshi": "10"})
        )
        created = await client.create_charge_invoice(InvoiceRequest(amount=10, expiry=timedelta(seconds=1)))

        assert created.id == "abc"
        assert created.msatoshi == 10


class TestGetInvoice:
    @pytest.mark.asyncio
    async def test_not_found_returns_none(self, make_client):
        urls = []

        def handler(request: httpx.Request) -> httpx.Response:
            urls.append(str(request.url))
            return httpx.Response(404, text="Not Found")

        client = make_client(handler)

        assert await client.get_invoice("missing-id") is None
        assert await client.get_charge_invoice("missing-id") is None
        assert urls == ["https://charge.test/invoice/missing-id"] * 2

    @pytest.mark.asyncio
    async def test_paid_invoice_is_mapped(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["Authorization"] == EXPECTED_AUTH
            return httpx.Response(
                200,
                json={"id": "x", "msatoshi": 500, "status": "paid", "paid_at": 1_700_000_000},
            )

        client = make_client(handler)

        invoice = await client.get_invoice("x")

        assert invoice is not None
        assert invoice.status is LightningInvoiceStatus.PAID
        assert invoice.paid_at == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)
        assert invoice.amount == 500

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, make_client):
        client = make_client(lambda request: httpx.Response(401))

        with pytest.raises(TransportError) as excinfo:
            await client.get_invoice("x")

        assert excinfo.value.status_code == 401

    @pytest.mark.asyncio
    async def test_connection_failure_is_transport_error(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(TransportError) as excinfo:
            await client.get_invoice("x")

        assert excinfo.value.status_code is None
        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_malformed_payload_is_transport_error(self, make_client):
        client = make_client(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(TransportError):
            await client.get_invoice("x")


class TestGetInfo:
    @pytest.mark.asyncio
    async def test_maps_node_information(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == "https://charge.test/info"
            return httpx.Response(
                200,
                json={
                    "id": "02abc",
                    "address": [{"type": "ipv4", "address": "1.2.3.4", "port": 9735}],
                    "blockheight": 42,
                    "network": "regtest",
                },
            )

        client = make_client(handler)

        info = await client.get_info()

        assert info.block_height == 42
        assert info.node_infos == [NodeInfo(node_id="02abc", host="1.2.3.4", port=9735)]
        assert (await client.get_charge_info()).network == "regtest"


class TestCookieAuthentication:
    @pytest.mark.asyncio
    async def test_cookie_is_read_per_request(self, make_client, tmp_path):
        cookie = tmp_path / ".cookie"
        cookie.write_text("api-token:one")
        headers = []

        def handler(request: httpx.Request) -> httpx.Response:
            headers.append(request.headers["Authorization"])
            return httpx.Response(404)

        client = make_client(handler, url="https://charge.test/", cookie_file_path=cookie)

        await client.get_invoice("a")
        cookie.write_text("api-token:two")
        await client.get_invoice("a")

        assert headers == [
            "Basic " + base64.b64encode(b"api-token:one").decode(),
            "Basic " + base64.b64encode(b"api-token:two").decode(),
        ]

    @pytest.mark.asyncio
    async def test_unreadable_cookie_propagates(self, make_client, tmp_path):
        client = make_client(no_network, url="https://charge.test/", cookie_file_path=tmp_path / "gone")

        with pytest.raises(CredentialReadError):
            await client.get_invoice("a")


class TestUnsupportedOperations:
    @pytest.mark.parametrize(
        "call",
        [
            lambda client: client.pay("lnbc..."),
            lambda client: client.open_channel(
                OpenChannelRequest(
                    node_info=NodeInfo(node_id="02abc", host="1.2.3.4"),
                    channel_amount_sat=100_000,
                )
            ),
            lambda client: client.get_deposit_address(),
            lambda client: client.connect_to(NodeInfo(node_id="02abc", host="1.2.3.4")),
        ],
    )
    def test_raise_immediately_without_network(self, make_client, call):
        client = make_client(no_network)

        with pytest.raises(UnsupportedOperation) as excinfo:
            call(client)

        assert excinfo.value.backend == "Lightning Charge"
        assert isinstance(excinfo.value, NotImplementedError)

    @pytest.mark.asyncio
    async def test_raise_when_awaited_through_the_contract(self, make_client):
        client: LightningClient = make_client(no_network)

        with pytest.raises(UnsupportedOperation, match="pay"):
            await client.pay("lnbc...")


def test_satisfies_generic_contract(make_client):
    assert isinstance(make_client(no_network), LightningClient)


def test_url_without_credentials_fails_construction(settings):
    with pytest.raises(ConfigurationError):
        ChargeClient("https://charge.test/", settings=settings)


@pytest.mark.asyncio
async def test_owned_http_client_is_closed(settings):
    async with ChargeClient(CHARGE_URL, settings=settings) as client:
        http = client._http

    assert http.is_closed

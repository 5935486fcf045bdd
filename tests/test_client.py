"""
Tests for the ArseedingClient class.
"""
import json
import re

import pytest
import requests
from unittest.mock import MagicMock

from arseeding_sdk import ArseedingClient
from arseeding_sdk.data_item import ArweaveItemSigner, DataItem
from arseeding_sdk.exceptions import (
    APIError, ArgumentError, DecodeError, NetworkError, SigningError, UnknownTokenError,
)
from arseeding_sdk.models import Tag
from tests.test_helpers import (
    TEST_ARSEEDING_URL, TEST_BUNDLER, TEST_EVERPAY_URL, TOKEN_INFO, create_test_client,
    create_test_everpay,
)

ORDER = {
    "itemId": "X",
    "bundler": "B",
    "currency": "usdc",
    "decimals": 6,
    "fee": "1000",
    "paymentExpiredTime": 1656326400,
    "expectedBlock": 960000,
}


def _order(**overrides):
    return dict(ORDER, **overrides)


class TestSubmission:

    def test_client_requires_https(self):
        with pytest.raises(ValueError, match="https"):
            ArseedingClient(url="http://arseed.example.com")

    def test_default_url_from_config(self):
        assert ArseedingClient().url == "https://arseed.web3infra.dev"

    def test_submit_item_with_currency_and_key(self, requests_mock):
        route = requests_mock.post(f"{TEST_ARSEEDING_URL}/bundle/tx/usdc", json=ORDER)
        client = create_test_client()

        order = client.submit_item(b"\x01\x00item", "usdc", "secret-key")

        assert order.item_id == "X"
        assert order.fee == "1000"
        assert order.payment_expired_time == 1656326400
        request = route.last_request
        assert request.body == b"\x01\x00item"
        assert request.headers["Content-Type"] == "application/octet-stream"
        assert request.headers["X-API-KEY"] == "secret-key"

    def test_submit_item_without_currency(self, requests_mock):
        route = requests_mock.post(f"{TEST_ARSEEDING_URL}/bundle/tx", json=ORDER)
        create_test_client().submit_item(b"item")
        assert route.called
        assert "X-API-KEY" not in route.last_request.headers

    def test_submit_item_error_envelope(self, requests_mock):
        requests_mock.post(
            f"{TEST_ARSEEDING_URL}/bundle/tx/usdc", json={"error": "err_invalid_signature"}, status_code=400,
        )
        with pytest.raises(APIError) as exc_info:
            create_test_client().submit_item(b"item", "usdc")
        assert exc_info.value.message == "err_invalid_signature"

    def test_submit_item_network_error(self, requests_mock):
        requests_mock.post(f"{TEST_ARSEEDING_URL}/bundle/tx/usdc", exc=requests.ConnectionError("reset"))
        with pytest.raises(NetworkError):
            create_test_client().submit_item(b"item", "usdc")

    def test_bundle_and_submit_uses_item_signer(self, requests_mock, mock_item_signer):
        route = requests_mock.post(f"{TEST_ARSEEDING_URL}/bundle/tx/ar", json=_order(currency="AR"))
        client = create_test_client(item_signer=mock_item_signer)

        client.bundle_and_submit(b"hello", {"Content-Type": "text/plain"}, "ar")

        data, tags = mock_item_signer.create_and_sign.call_args.args
        assert data == b"hello"
        assert tags == [Tag(name="Content-Type", value="text/plain")]
        assert route.last_request.body == b"signed-item-bytes"

    def test_bundle_and_submit_requires_item_signer(self):
        with pytest.raises(ArgumentError, match="item signer"):
            create_test_client().bundle_and_submit(b"data", {}, "ar")

    def test_bundle_and_submit_real_item(self, requests_mock, arweave_signer):
        route = requests_mock.post(f"{TEST_ARSEEDING_URL}/bundle/tx/ar", json=_order(currency="AR"))
        client = create_test_client(item_signer=ArweaveItemSigner(arweave_signer))

        client.bundle_and_submit(b"test", {"hello": "there"}, "ar")

        item = DataItem.from_bytes(route.last_request.body)
        assert item.verify()
        assert item.data == b"test"
        assert item.tags == [Tag(name="hello", value="there")]
        assert item.owner == arweave_signer.modulus


class TestSendAndPay:

    def _setup(self, requests_mock, mock_item_signer, order=ORDER):
        requests_mock.get(f"{TEST_EVERPAY_URL}/info", json=TOKEN_INFO)
        bundler_route = requests_mock.post(f"{TEST_ARSEEDING_URL}/bundle/tx/usdc", json=order)
        client = create_test_client(item_signer=mock_item_signer, everpay=create_test_everpay())
        return client, bundler_route

    def test_pays_bundler_and_returns_item_id(self, requests_mock, mock_item_signer):
        client, _ = self._setup(requests_mock, mock_item_signer)
        pay_route = requests_mock.post(f"{TEST_EVERPAY_URL}/tx", json={"status": "ok"})

        item_id = client.send_and_pay("usdc", {"hello": "there"}, b"test1")

        assert item_id == "X"
        tx = pay_route.last_request.json()
        assert tx["to"] == "B"
        assert tx["amount"] == "1000"
        assert tx["tokenSymbol"] == "USDC"
        assert tx["action"] == "transfer"
        assert json.loads(tx["data"]) == {"appName": "arseeding", "action": "payment", "itemIds": ["X"]}
        assert tx["data"] == '{"appName":"arseeding","action":"payment","itemIds":["X"]}'

    def test_payment_api_error_propagates_with_order(self, requests_mock, mock_item_signer):
        client, bundler_route = self._setup(requests_mock, mock_item_signer)
        requests_mock.post(f"{TEST_EVERPAY_URL}/tx", json={"error": "err_insufficient_balance"}, status_code=400)

        with pytest.raises(APIError) as exc_info:
            client.send_and_pay("usdc", {}, b"test1")

        assert exc_info.value.message == "err_insufficient_balance"
        assert exc_info.value.order.item_id == "X"
        assert exc_info.value.order.fee == "1000"
        # submission happened exactly once: no retry, no rollback
        assert bundler_route.call_count == 1

    def test_payment_network_error_propagates(self, requests_mock, mock_item_signer):
        client, _ = self._setup(requests_mock, mock_item_signer)
        requests_mock.post(f"{TEST_EVERPAY_URL}/tx", exc=requests.ConnectionError("down"))
        with pytest.raises(NetworkError) as exc_info:
            client.send_and_pay("usdc", {}, b"test1")
        assert exc_info.value.order.item_id == "X"

    def test_unknown_order_currency(self, requests_mock, mock_item_signer):
        client, _ = self._setup(requests_mock, mock_item_signer, order=_order(currency="doge"))
        pay_route = requests_mock.post(f"{TEST_EVERPAY_URL}/tx", json={"status": "ok"})
        with pytest.raises(UnknownTokenError) as exc_info:
            client.send_and_pay("usdc", {}, b"test1")
        assert exc_info.value.order.item_id == "X"
        assert not pay_route.called

    def test_invalid_fee(self, requests_mock, mock_item_signer):
        client, _ = self._setup(requests_mock, mock_item_signer, order=_order(fee="1.5"))
        with pytest.raises(DecodeError, match="Invalid fee") as exc_info:
            client.send_and_pay("usdc", {}, b"test1")
        assert exc_info.value.order.item_id == "X"

    def test_submission_failure_skips_payment(self, requests_mock, mock_item_signer, mock_everpay_info):
        requests_mock.post(f"{TEST_ARSEEDING_URL}/bundle/tx/usdc", json={"error": "err_too_large"}, status_code=413)
        pay_route = requests_mock.post(f"{TEST_EVERPAY_URL}/tx", json={"status": "ok"})
        client = create_test_client(item_signer=mock_item_signer, everpay=create_test_everpay())

        with pytest.raises(APIError, match="err_too_large") as exc_info:
            client.send_and_pay("usdc", {}, b"test1")
        assert exc_info.value.order is None
        assert not pay_route.called

    def test_signing_failure_before_submission(self, requests_mock, mock_everpay_info):
        item_signer = MagicMock()
        item_signer.create_and_sign.side_effect = SigningError("no key")
        route = requests_mock.post(f"{TEST_ARSEEDING_URL}/bundle/tx/usdc", json=ORDER)
        client = create_test_client(item_signer=item_signer, everpay=create_test_everpay())
        with pytest.raises(SigningError):
            client.send_and_pay("usdc", {}, b"test1")
        assert not route.called

    def test_requires_everpay(self, mock_item_signer):
        with pytest.raises(ArgumentError, match="Everpay"):
            create_test_client(item_signer=mock_item_signer).send_and_pay("usdc", {}, b"x")


class TestQueries:

    def test_get_bundler(self, requests_mock):
        requests_mock.get(f"{TEST_ARSEEDING_URL}/bundle/bundler", json={"bundler": TEST_BUNDLER})
        assert create_test_client().get_bundler().bundler == TEST_BUNDLER

    def test_get_bundle_fee(self, requests_mock):
        requests_mock.get(
            f"{TEST_ARSEEDING_URL}/bundle/fee/1000/USDC",
            json={"currency": "USDC", "decimals": 6, "finalFee": "2035"},
        )
        fee = create_test_client().get_bundle_fee(1000, "USDC")
        assert fee.final_fee == "2035"
        assert fee.decimals == 6

    def test_get_bundler_orders_with_cursor(self, requests_mock):
        route = requests_mock.get(
            f"{TEST_ARSEEDING_URL}/bundle/orders/signer1",
            json=[{
                "id": 5,
                "createdAt": "2022-06-24T03:29:54.174Z",
                "updatedAt": "2022-06-24T03:30:00.000Z",
                "itemId": "X",
                "signer": "signer1",
                "signType": 1,
                "size": 1024,
                "currency": "AR",
                "decimals": 12,
                "fee": "1000",
                "paymentExpiredTime": 1656041394,
                "expectedBlock": 960000,
                "paymentStatus": "paid",
                "paymentId": "0xpay",
                "onChainStatus": "success",
            }],
        )
        orders = create_test_client().get_bundler_orders("signer1", cursor="5")
        assert route.last_request.qs == {"cursor": ["5"]}
        assert orders[0].item_id == "X"
        assert orders[0].created_at.year == 2022
        assert orders[0].created_at.microsecond == 174000
        assert orders[0].payment_status == "paid"

    def test_get_bundler_orders_without_cursor(self, requests_mock):
        route = requests_mock.get(f"{TEST_ARSEEDING_URL}/bundle/orders/signer1", json=[])
        assert create_test_client().get_bundler_orders("signer1") == []
        assert route.last_request.qs == {}

    def test_get_item_meta(self, requests_mock):
        requests_mock.get(
            f"{TEST_ARSEEDING_URL}/bundle/tx/X",
            json={
                "signatureType": 1, "signature": "sig", "owner": "own", "target": "",
                "anchor": "anc", "tags": [{"name": "a", "value": "b"}], "data": "", "id": "X",
            },
        )
        meta = create_test_client().get_item_meta("X")
        assert meta.signature_type == 1
        assert meta.tags == [Tag(name="a", value="b")]

    def test_get_items_by_ar_id(self, requests_mock):
        requests_mock.get(f"{TEST_ARSEEDING_URL}/bundle/itemIds/arid", json=["X", "Y"])
        assert create_test_client().get_items_by_ar_id("arid") == ["X", "Y"]

    def test_get_items_by_ar_id_bad_schema(self, requests_mock):
        requests_mock.get(f"{TEST_ARSEEDING_URL}/bundle/itemIds/arid", json={"not": "a list"})
        with pytest.raises(DecodeError):
            create_test_client().get_items_by_ar_id("arid")

    def test_submit_native_data(self, requests_mock):
        route = requests_mock.post(f"{TEST_ARSEEDING_URL}/bundle/data", json={"itemId": "N"})
        result = create_test_client().submit_native_data(
            b"<h1>hi</h1>", "text/html", {"App-Name": "demo"}, api_key="k",
        )
        assert result.item_id == "N"
        request = route.last_request
        assert request.headers["Content-Type"] == "text/html"
        assert request.headers["X-API-KEY"] == "k"
        assert request.body == b"<h1>hi</h1>"
        assert "content-type=text%2fhtml" in request.url.lower()
        assert "app-name=demo" in request.url.lower()

    @pytest.mark.parametrize("call", [
        lambda c: c.get_bundler(),
        lambda c: c.get_bundle_fee(1, "AR"),
        lambda c: c.get_bundler_orders("s"),
        lambda c: c.get_item_meta("X"),
        lambda c: c.get_items_by_ar_id("a"),
        lambda c: c.submit_native_data(b"x", "text/plain"),
    ])
    def test_error_envelope_on_every_endpoint(self, requests_mock, call):
        matcher = re.compile(re.escape(TEST_ARSEEDING_URL))
        for method in ("GET", "POST"):
            requests_mock.register_uri(method, matcher, json={"error": "err_not_found"}, status_code=404)
        with pytest.raises(APIError) as exc_info:
            call(create_test_client())
        assert exc_info.value.message == "err_not_found"
        assert exc_info.value.status_code == 404

"""
ArseedingClient - Main client for the Arseeding bundler.
"""
import logging
from typing import List, Optional

import requests

from .config import NetworkConfig
from .data_item import ItemSigner, TagsLike, normalize_tags
from .everpay import Everpay, PayTxData
from .exceptions import ArgumentError, ArseedingError, DecodeError
from .models import (
    BundlerRes, FeeRes, ItemMetaRes, ItemSubmissionRes, OrderRes, SubmitNativeRes,
)
from .utils import decode_response, send_request, validate_service_url

PAYMENT_APP_NAME = "arseeding"
PAYMENT_ACTION = "payment"


class ArseedingClient:
    """
    Client for the Arseeding bundler service.

    This client handles:
    1. Submitting data items (pre-signed, or signed here from raw data)
    2. Paying for submissions through everPay
    3. Querying fees, orders and item metadata

    To pay for submissions you'll need an ``Everpay`` instance bound to
    the paying wallet.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        item_signer: Optional[ItemSigner] = None,
        everpay: Optional[Everpay] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the ArseedingClient

        Args:
            url: Bundler URL (defaults to the configured mainnet endpoint)
            item_signer: Signs data items for ``bundle_and_submit``
            everpay: everPay facade used by ``send_and_pay``
            session: Optional requests session
            timeout: Timeout for HTTP requests in seconds
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If the URL doesn't use https (unless it's localhost/127.0.0.1)
        """
        self.url = validate_service_url("url", url or NetworkConfig.get_arseeding_url())
        self.item_signer = item_signer
        self.everpay = everpay
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else NetworkConfig.get_timeout()
        self.logger = logger or logging.getLogger(__name__)

    def set_session(self, session: requests.Session) -> None:
        self.session = session

    def _headers(self, content_type: str, api_key: str) -> dict:
        headers = {"Content-Type": content_type}
        if api_key:
            headers["X-API-KEY"] = api_key
        return headers

    def get_bundler(self) -> BundlerRes:
        """Get the bundler's settlement address."""
        response = send_request(self.session, "GET", f"{self.url}/bundle/bundler", timeout=self.timeout)
        return decode_response(response, BundlerRes)

    def submit_item(self, data: bytes, currency: str = "", api_key: str = "") -> ItemSubmissionRes:
        """
        Submit a signed, serialized data item.

        Args:
            data: Serialized ANS-104 data item
            currency: Payment currency; empty uses the bundler's default endpoint
            api_key: Optional API key (sent as X-API-KEY)

        Returns:
            The bundler's order descriptor

        Raises:
            APIError: If the bundler rejects the item
            NetworkError: On transport failure
            DecodeError: If the response cannot be decoded
        """
        url = f"{self.url}/bundle/tx/{currency}" if currency else f"{self.url}/bundle/tx"
        self.logger.debug(f"Submitting data item ({len(data)} bytes) to {url}")
        response = send_request(
            self.session, "POST", url,
            data=data,
            headers=self._headers("application/octet-stream", api_key),
            timeout=self.timeout,
        )
        order = decode_response(response, ItemSubmissionRes)
        self.logger.info(f"Bundler accepted item {order.item_id}: fee {order.fee} {order.currency}")
        return order

    def bundle_and_submit(
        self,
        data: bytes,
        tags: TagsLike = None,
        currency: str = "",
        api_key: str = ""
    ) -> ItemSubmissionRes:
        """
        Wrap raw data and tags into a signed data item and submit it.

        Raises:
            ArgumentError: If no item signer is configured
            SigningError: If item signing fails
            APIError, NetworkError, DecodeError: If submission fails
        """
        if self.item_signer is None:
            raise ArgumentError("An item signer is required to bundle data")
        item = self.item_signer.create_and_sign(bytes(data), normalize_tags(tags))
        return self.submit_item(item, currency, api_key)

    def send_and_pay(self, currency: str, tags: TagsLike, data: bytes, api_key: str = "") -> str:
        """
        Store data and pay for it in one call.

        The bundler accepts the item first; the fee is then paid with an
        everPay transfer to the bundler. If payment fails the item stays
        accepted but unpaid: the payment error is re-raised with the order
        attached as ``order`` so the caller can retry payment later.

        Args:
            currency: Payment currency symbol (e.g. "AR", "USDC")
            tags: Data item tags
            data: Raw data to store
            api_key: Optional API key

        Returns:
            The item id

        Raises:
            ArgumentError: If no everPay instance is configured
            ArseedingError: Any submission or payment failure
        """
        if self.everpay is None:
            raise ArgumentError("An Everpay instance is required to pay for submissions")

        order = self.bundle_and_submit(data, tags, currency, api_key)
        item_id = order.item_id

        payload = PayTxData(
            app_name=PAYMENT_APP_NAME,
            action=PAYMENT_ACTION,
            item_ids=[item_id],
        ).model_dump_json(by_alias=True)

        try:
            try:
                fee = int(order.fee)
            except ValueError as e:
                raise DecodeError(f"Invalid fee in bundler order: {order.fee!r}") from e
            self.everpay.transfer(order.currency, order.bundler, fee, payload)
        except ArseedingError as e:
            self.logger.warning(f"Item {item_id} accepted but payment failed: {e}")
            e.order = order
            raise

        self.logger.info(f"Paid {order.fee} {order.currency} for item {item_id}")
        return item_id

    def submit_native_data(
        self,
        data: bytes,
        content_type: str,
        tags: TagsLike = None,
        api_key: str = ""
    ) -> SubmitNativeRes:
        """Submit raw data; the bundler wraps it into a data item itself."""
        params = {"Content-Type": content_type}
        for tag in normalize_tags(tags):
            params[tag.name] = tag.value
        response = send_request(
            self.session, "POST", f"{self.url}/bundle/data",
            data=data,
            params=params,
            headers=self._headers(content_type, api_key),
            timeout=self.timeout,
        )
        return decode_response(response, SubmitNativeRes)

    def get_bundle_fee(self, size: int, currency: str) -> FeeRes:
        """Quote the fee for storing ``size`` bytes paid in ``currency``."""
        response = send_request(
            self.session, "GET", f"{self.url}/bundle/fee/{size}/{currency}", timeout=self.timeout
        )
        return decode_response(response, FeeRes)

    def get_bundler_orders(self, signer: str, cursor: str = "") -> List[OrderRes]:
        params = {"cursor": cursor} if cursor else None
        response = send_request(
            self.session, "GET", f"{self.url}/bundle/orders/{signer}",
            params=params, timeout=self.timeout,
        )
        return decode_response(response, List[OrderRes])

    def get_item_meta(self, item_id: str) -> ItemMetaRes:
        response = send_request(self.session, "GET", f"{self.url}/bundle/tx/{item_id}", timeout=self.timeout)
        return decode_response(response, ItemMetaRes)

    def get_items_by_ar_id(self, ar_id: str) -> List[str]:
        response = send_request(
            self.session, "GET", f"{self.url}/bundle/itemIds/{ar_id}", timeout=self.timeout
        )
        return decode_response(response, List[str])

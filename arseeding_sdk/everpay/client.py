"""
HTTP client for the everPay settlement service.
"""
import logging
from typing import Optional

import requests

from ..config import NetworkConfig
from ..utils import decode_response, send_request, validate_service_url
from .types import Balances, StatusRes, TokenInfo, Transaction

logger = logging.getLogger(__name__)


class EverpayClient:
    """
    Client for the everPay REST API.

    Every non-success response is surfaced as ``APIError`` carrying the
    service's error message. Nothing is retried.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the everPay client

        Args:
            url: Service URL (defaults to the configured mainnet endpoint)
            session: Optional requests session to share connections
            timeout: Request timeout in seconds
            logger: Optional logger instance

        Raises:
            ValueError: If the URL doesn't use https (unless it's localhost/127.0.0.1)
        """
        self.url = validate_service_url("url", url or NetworkConfig.get_everpay_url())
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else NetworkConfig.get_timeout()
        self.logger = logger or logging.getLogger(__name__)

    def set_session(self, session: requests.Session) -> None:
        self.session = session

    def info(self) -> TokenInfo:
        """Fetch token list, fee recipient and service status."""
        response = send_request(self.session, "GET", f"{self.url}/info", timeout=self.timeout)
        return decode_response(response, TokenInfo)

    def balances(self, account_id: str) -> Balances:
        """Fetch every token balance of an account."""
        response = send_request(
            self.session, "GET", f"{self.url}/balances/{account_id}", timeout=self.timeout
        )
        return decode_response(response, Balances)

    def submit_tx(self, tx: Transaction) -> StatusRes:
        """
        Submit a signed transaction.

        Args:
            tx: Signed transaction

        Returns:
            The service's status payload, passed through verbatim

        Raises:
            APIError: If the service rejects the transaction
            NetworkError: On transport failure
            DecodeError: If the response is not valid JSON
        """
        self.logger.debug(f"Submitting {tx.action} tx nonce={tx.nonce} to={tx.to} amount={tx.amount}")
        response = send_request(
            self.session,
            "POST",
            f"{self.url}/tx",
            json=tx.to_wire(),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        result = decode_response(response, StatusRes)
        self.logger.info(f"everPay accepted tx nonce={tx.nonce}: {result.status}")
        return result

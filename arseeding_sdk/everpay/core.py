"""
everPay facade: token registry, transaction builder and settlement client.
"""
import logging
from typing import Dict, Optional

from ..signer import Signer
from .builder import TransactionBuilder
from .client import EverpayClient
from .registry import TokenRegistry
from .types import Balances, StatusRes, Token, TokenInfo, Transaction

logger = logging.getLogger(__name__)


class Everpay:
    """
    Pays and transfers tokens on everPay with a given signer.

    The token registry is loaded once at construction. It is not refreshed
    automatically; call ``refresh`` when stale fee data matters.
    """

    def __init__(
        self,
        signer: Signer,
        client: Optional[EverpayClient] = None,
        refresh: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            signer: Signer used for every transaction
            client: everPay HTTP client (defaults to the configured endpoint)
            refresh: Load the token registry immediately
            logger: Optional logger instance

        Raises:
            NetworkError, DecodeError, APIError: If the initial registry load fails
        """
        self.logger = logger or logging.getLogger(__name__)
        self.client = client or EverpayClient(logger=self.logger)
        self.signer = signer
        self.registry = TokenRegistry(self.client.info, logger=self.logger)
        self.builder = TransactionBuilder(signer, self.registry, logger=self.logger)
        if refresh:
            self.refresh()

    def refresh(self) -> None:
        self.registry.refresh()

    def info(self) -> TokenInfo:
        return self.client.info()

    def tokens(self) -> Dict[str, Token]:
        return self.registry.tokens()

    def symbol_to_tag(self) -> Dict[str, str]:
        return self.registry.symbol_to_tag()

    def balances(self, account_id: Optional[str] = None) -> Balances:
        """Balances of ``account_id``, or of the signer's own wallet."""
        return self.client.balances(account_id or self.signer.wallet_address())

    def sign(self, message: str) -> str:
        return self.signer.sign(message)

    def submit_tx(self, tx: Transaction) -> StatusRes:
        return self.client.submit_tx(tx)

    def sign_and_send_tx(
        self,
        token_symbol: str,
        action: str,
        fee: int,
        fee_recipient: str,
        token_id: str,
        chain_type: str,
        chain_id: str,
        receiver: str,
        amount: int,
        data: str
    ) -> StatusRes:
        """Build, sign and submit a transaction from explicit parameters."""
        tx = self.builder.build_and_sign_raw(
            token_symbol, action, fee, fee_recipient, token_id,
            chain_type, chain_id, receiver, amount, data,
        )
        return self.submit_tx(tx)

    def transfer(self, symbol: str, receiver: str, amount: int, data: str) -> StatusRes:
        """
        Transfer ``amount`` of the token named ``symbol`` to ``receiver``.

        Raises:
            UnknownTokenError: If ``symbol`` is not registered
            SigningError: If signing fails
            APIError, NetworkError, DecodeError: If submission fails
        """
        tx = self.builder.build_and_sign_transfer(symbol, receiver, amount, data)
        return self.submit_tx(tx)

"""
Ethereum wallet signer (elliptic curve scheme).
"""
import logging
from typing import List, Protocol, Union

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.base import BaseAccount

from ..exceptions import AddressError, SigningError
from . import Signer, SignerType

logger = logging.getLogger(__name__)


class WalletSession(Protocol):
    """Protocol for interactive wallet sessions (e.g. WalletConnect)"""

    def accounts(self) -> List[str]:
        """Accounts approved for this session"""
        ...

    def personal_sign(self, message: str, account: str) -> str:
        """Ask the wallet to ``personal_sign`` a message; may block on the user"""
        ...


class LocalWalletSession:
    """Wallet session backed by a local private key. No user interaction."""

    def __init__(self, priv_key: str):
        self.account: BaseAccount = Account.from_key(priv_key)

    def accounts(self) -> List[str]:
        return [self.account.address]

    def personal_sign(self, message: str, account: str) -> str:
        if account.lower() != self.account.address.lower():
            raise ValueError(f"Account {account} is not managed by this session")
        signed = self.account.sign_message(encode_defunct(text=message))
        return "0x" + bytes(signed.signature).hex()


class EthSigner(Signer):
    """
    Signer that delegates to an interactive Ethereum wallet session.

    The account is fixed when the signer is created: the first account the
    session exposes. The wallet applies the EIP-191 prefix itself, so the
    raw message is forwarded unchanged.
    """

    def __init__(self, session: WalletSession):
        self.session = session
        try:
            accounts = session.accounts()
        except Exception as e:
            raise AddressError(f"Cannot read wallet session accounts: {str(e)}") from e
        if not accounts:
            raise AddressError("Wallet session exposes no accounts")
        self.account = accounts[0]
        logger.debug(f"EthSigner bound to account {self.account}")

    def sign(self, message: Union[str, bytes]) -> str:
        try:
            if isinstance(message, (bytes, bytearray)):
                message = bytes(message).decode("utf-8")
            return self.session.personal_sign(message, self.account)
        except Exception as e:
            logger.error(f"Wallet signing failed: {e}")
            raise SigningError(f"Wallet signing failed: {str(e)}") from e

    def owner(self) -> str:
        return ""

    def wallet_address(self) -> str:
        return self.account

    def signer_type(self) -> SignerType:
        return SignerType.ECDSA

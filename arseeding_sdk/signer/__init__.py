"""
Signer abstraction for the Arseeding SDK.

Two incompatible signature schemes are supported behind one interface:

- ``ArweaveSigner``: RSA keypair from an Arweave wallet (hash scheme)
- ``EthSigner``: Ethereum wallet reached through an interactive session
  (elliptic curve scheme)
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Union


class SignerType(str, Enum):
    """Signature scheme tag reported by a signer."""
    RSA = "RSA"
    ECDSA = "ECDSA"


class Signer(ABC):
    """
    Abstract base class for signers.

    A signer can sign an arbitrary message and report a stable wallet
    address and scheme tag. Signing material never leaves the signer.
    """

    @abstractmethod
    def sign(self, message: Union[str, bytes]) -> str:
        """
        Sign a message.

        Args:
            message: Message to sign (str is UTF-8 encoded)

        Returns:
            Signature string in the scheme's wire format

        Raises:
            SigningError: If key material is unavailable or signing fails
        """
        pass

    @abstractmethod
    def wallet_address(self) -> str:
        """
        Get the wallet address for this signer.

        Raises:
            AddressError: If the address cannot be derived
        """
        pass

    @abstractmethod
    def owner(self) -> str:
        """Public key material embedded in signatures, if any"""
        pass

    @abstractmethod
    def signer_type(self) -> SignerType:
        pass


from .arweave import ArweaveSigner, verify_arweave_signature  # noqa: E402
from .eth import EthSigner, WalletSession, LocalWalletSession  # noqa: E402

__all__ = [
    "Signer",
    "SignerType",
    "ArweaveSigner",
    "EthSigner",
    "WalletSession",
    "LocalWalletSession",
    "verify_arweave_signature",
]

"""
Arseeding SDK - store data on Arweave through an Arseeding bundler and pay
for it with everPay.
"""
from .client import ArseedingClient
from .config import NetworkConfig
from .data_item import ArweaveItemSigner, DataItem, ItemSigner
from .everpay import Everpay, EverpayClient, Token, TokenRegistry, Transaction, TransactionBuilder
from .exceptions import (
    ArseedingError, ArgumentError, UnknownTokenError, SigningError, AddressError,
    NetworkError, DecodeError, APIError,
)
from .models import (
    BundlerRes, FeeRes, ItemMetaRes, ItemSubmissionRes, OrderRes, SubmitNativeRes, Tag,
)
from .signer import ArweaveSigner, EthSigner, LocalWalletSession, Signer, SignerType, WalletSession
from .version import __version__

__all__ = [
    "ArseedingClient",
    "NetworkConfig",
    "ArweaveItemSigner",
    "DataItem",
    "ItemSigner",
    "Everpay",
    "EverpayClient",
    "Token",
    "TokenRegistry",
    "Transaction",
    "TransactionBuilder",
    "ArseedingError",
    "ArgumentError",
    "UnknownTokenError",
    "SigningError",
    "AddressError",
    "NetworkError",
    "DecodeError",
    "APIError",
    "BundlerRes",
    "FeeRes",
    "ItemMetaRes",
    "ItemSubmissionRes",
    "OrderRes",
    "SubmitNativeRes",
    "Tag",
    "Signer",
    "SignerType",
    "ArweaveSigner",
    "EthSigner",
    "WalletSession",
    "LocalWalletSession",
    "__version__",
]

"""
everPay settlement module for the Arseeding SDK.

This module resolves currencies to tokens, builds and signs settlement
transactions, and submits them to the everPay service.
"""
from .builder import TransactionBuilder
from .client import EverpayClient
from .core import Everpay
from .registry import RegistrySnapshot, TokenRegistry
from .types import (
    ACCOUNT_TYPE_AR, ACCOUNT_TYPE_EVM, AR_ADDRESS, ARWEAVE_CHAIN_ID, CHAIN_ID,
    CHAIN_TYPE, ETH_ADDRESS, ETH_CHAIN_ID, EVM_ADDRESS, TX_ACTION_BURN,
    TX_ACTION_MINT, TX_ACTION_TRANSFER, TX_VERSION_V1, Balance, Balances,
    PayTxData, StatusRes, Token, TokenInfo, Transaction,
)

__all__ = [
    'Everpay', 'EverpayClient', 'TokenRegistry', 'RegistrySnapshot', 'TransactionBuilder',
    'Token', 'TokenInfo', 'Transaction', 'Balance', 'Balances', 'StatusRes', 'PayTxData',
    'TX_VERSION_V1', 'TX_ACTION_TRANSFER', 'TX_ACTION_MINT', 'TX_ACTION_BURN',
    'AR_ADDRESS', 'EVM_ADDRESS', 'ETH_ADDRESS', 'ACCOUNT_TYPE_AR', 'ARWEAVE_CHAIN_ID',
    'ACCOUNT_TYPE_EVM', 'ETH_CHAIN_ID', 'CHAIN_TYPE', 'CHAIN_ID',
]

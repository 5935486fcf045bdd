"""
Shared constants and factories for the Arseeding SDK tests.
"""
import copy
from typing import Optional

from arseeding_sdk.client import ArseedingClient
from arseeding_sdk.everpay import Everpay, EverpayClient
from arseeding_sdk.signer import EthSigner, LocalWalletSession

TEST_ARSEEDING_URL = "https://arseed.example.com"
TEST_EVERPAY_URL = "https://everpay.example.com"
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_FEE_RECIPIENT = "0x6451eB7f668de69Fb4C943Db72bCF2A73DeeC6B1"
TEST_BUNDLER = "uDA8ZblC-lyEFfsYXKewpwaX-kkNDDw8az3IW9bDL68"
AR_TOKEN_ID = "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA,0x4fadc7a98f2dc96510e42dd1a74141eeae0c1543"
USDC_TOKEN_ID = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"

TOKEN_INFO = {
    "isSynced": True,
    "isClosed": False,
    "balanceRootHash": "0x1111",
    "rootHash": "0x2222",
    "everRootHash": "0x3333",
    "owner": "0x4444",
    "everChainID": "1",
    "feeRecipient": TEST_FEE_RECIPIENT,
    "ethLocker": "0x38741a69785e84399fcf7c5ad61d572f7ecb1dab",
    "arLocker": "dH-V5TkZc1eDyoyD-5nE0BkLkSV9lKgdTI0Kf-tM0KY",
    "tokenList": [
        {
            "tag": "AR_TAG",
            "id": AR_TOKEN_ID,
            "symbol": "AR",
            "decimals": 12,
            "totalSupply": "1000000000000000",
            "chainType": "arweave",
            "chainID": "0",
            "burnFees": {"arweave": "2000"},
            "transferFee": "1000",
            "bundleFee": "0",
            "holderNum": 42,
            "crossChainInfoList": None,
        },
        {
            "tag": "ethereum-usdc-" + USDC_TOKEN_ID,
            "id": USDC_TOKEN_ID,
            "symbol": "USDC",
            "decimals": 6,
            "totalSupply": "500000000",
            "chainType": "ethereum",
            "chainID": "1",
            "burnFees": {"ethereum": "5000000"},
            "transferFee": "0",
            "bundleFee": "0",
            "holderNum": 7,
        },
    ],
}


def token_info(**overrides) -> dict:
    """Deep copy of TOKEN_INFO with top-level overrides."""
    info = copy.deepcopy(TOKEN_INFO)
    info.update(overrides)
    return info


def create_test_everpay(signer=None, url: str = TEST_EVERPAY_URL, refresh: bool = True) -> Everpay:
    """
    Create an Everpay instance against the test URL.

    With ``refresh=True`` the caller must have mocked ``GET /info``.
    """
    if signer is None:
        signer = EthSigner(LocalWalletSession(TEST_PRIV_KEY))
    return Everpay(signer, client=EverpayClient(url=url, timeout=5), refresh=refresh)


def create_test_client(
    item_signer=None,
    everpay: Optional[Everpay] = None,
    url: str = TEST_ARSEEDING_URL,
) -> ArseedingClient:
    return ArseedingClient(url=url, item_signer=item_signer, everpay=everpay, timeout=5)

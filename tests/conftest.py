"""
Pytest fixtures for the Arseeding SDK tests.
"""
import pytest
from unittest.mock import MagicMock
from eth_account import Account

from arseeding_sdk.config import NetworkConfig
from arseeding_sdk.signer import ArweaveSigner, EthSigner, LocalWalletSession
from tests.test_helpers import TEST_EVERPAY_URL, TEST_PRIV_KEY, TOKEN_INFO

# ─────────────────────────────────────────────────────────────────────────
#  KEYS
# ─────────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def arweave_signer():
    """A 4096-bit Arweave signer; generated once since RSA keygen is slow"""
    return ArweaveSigner.generate()


@pytest.fixture
def eth_account():
    return Account.from_key(TEST_PRIV_KEY)


@pytest.fixture
def eth_signer():
    return EthSigner(LocalWalletSession(TEST_PRIV_KEY))


# ─────────────────────────────────────────────────────────────────────────
#  ENVIRONMENT
# ─────────────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep developer environment overrides out of the tests"""
    for name in ("ARSEEDING_URL", "EVERPAY_URL", "ARSEEDING_TIMEOUT", "ARSEEDING_NETWORK"):
        monkeypatch.delenv(name, raising=False)
    NetworkConfig._networks_cache = None
    yield
    NetworkConfig._networks_cache = None


# ─────────────────────────────────────────────────────────────────────────
#  SERVICES
# ─────────────────────────────────────────────────────────────────────────

@pytest.fixture
def mock_everpay_info(requests_mock):
    """Mock the everPay /info endpoint with the test token list"""
    return requests_mock.get(f"{TEST_EVERPAY_URL}/info", json=TOKEN_INFO, status_code=200)


@pytest.fixture
def mock_item_signer():
    """Item signer double that returns fixed item bytes"""
    signer = MagicMock()
    signer.create_and_sign = MagicMock(return_value=b"signed-item-bytes")
    return signer

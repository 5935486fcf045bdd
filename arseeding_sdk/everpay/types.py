"""
Data types and protocol constants for the everPay settlement service.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TX_VERSION_V1 = "v1"

TX_ACTION_TRANSFER = "transfer"
TX_ACTION_MINT = "mint"
TX_ACTION_BURN = "burn"

AR_ADDRESS = "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"
EVM_ADDRESS = "0x0000000000000000000000000000000000000000"
ETH_ADDRESS = EVM_ADDRESS

ACCOUNT_TYPE_AR = "arweave"
ARWEAVE_CHAIN_ID = "0"

ACCOUNT_TYPE_EVM = "ethereum"
ETH_CHAIN_ID = "1"

# AR is bridged on both chains, so its token carries both identities
CHAIN_TYPE = "arweave,ethereum"
CHAIN_ID = "0,1"


class EverpayModel(BaseModel):

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Token(EverpayModel):
    """Token descriptor: one fungible asset on the settlement network"""
    tag: str
    id: str
    symbol: str
    decimals: int
    total_supply: str = ""
    chain_type: str
    chain_id: str = Field(..., alias="chainID")
    burn_fees: Dict[str, str] = Field(default_factory=dict)
    transfer_fee: str
    bundle_fee: str = "0"
    holder_num: int = 0
    cross_chain_info_list: Optional[Any] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class TokenInfo(EverpayModel):
    """Response of the settlement service's ``/info`` endpoint"""
    is_synced: bool = False
    is_closed: bool = False
    balance_root_hash: str = ""
    root_hash: str = ""
    ever_root_hash: str = ""
    owner: str = ""
    ever_chain_id: str = Field("", alias="everChainID")
    fee_recipient: str
    eth_locker: str = ""
    ar_locker: str = ""
    token_list: List[Token]


class Balance(EverpayModel):
    tag: str
    amount: str
    decimals: int


class Balances(EverpayModel):
    accid: str
    balances: List[Balance]


class StatusRes(EverpayModel):
    status: str


class PayTxData(EverpayModel):
    """Payload embedded in a transfer that pays for bundler orders"""
    app_name: str
    action: str
    item_ids: List[str]


class Transaction(EverpayModel):
    """
    A settlement-network transfer/mint/burn record.

    ``sig`` stays empty until the canonical message from ``sig_msg`` has
    been signed. Signed records are produced by the transaction builder
    and are frozen.
    """
    token_symbol: str
    action: str
    from_address: str = Field(..., alias="from")
    to: str
    amount: str
    fee: str
    fee_recipient: str
    nonce: str
    token_id: str = Field(..., alias="tokenID")
    chain_type: str
    chain_id: str = Field(..., alias="chainID")
    data: str
    version: str = TX_VERSION_V1
    sig: str = ""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def sig_msg(self) -> str:
        """
        Build the canonical signing message.

        The server re-derives this exact string to verify ``sig``, so field
        order, labels, and separators must not change.
        """
        return (
            f"tokenSymbol:{self.token_symbol}\n"
            f"action:{self.action}\n"
            f"from:{self.from_address}\n"
            f"to:{self.to}\n"
            f"amount:{self.amount}\n"
            f"fee:{self.fee}\n"
            f"feeRecipient:{self.fee_recipient}\n"
            f"nonce:{self.nonce}\n"
            f"tokenID:{self.token_id}\n"
            f"chainType:{self.chain_type}\n"
            f"chainID:{self.chain_id}\n"
            f"data:{self.data}\n"
            f"version:{self.version}"
        )

    def to_wire(self) -> Dict[str, Any]:
        """JSON body for ``POST /tx``"""
        return self.model_dump(by_alias=True)

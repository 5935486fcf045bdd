"""
Settlement transaction builder.
"""
import logging
from typing import Optional, Union

from ..exceptions import ArgumentError, DecodeError
from ..signer import Signer
from ..utils import get_nonce
from .registry import TokenRegistry
from .types import TX_ACTION_TRANSFER, TX_VERSION_V1, Transaction

logger = logging.getLogger(__name__)


def _non_negative_int(name: str, value: Union[int, str]) -> int:
    # bool and float are rejected, never truncated
    if isinstance(value, (bool, float)):
        raise ArgumentError(f"{name} must be an integer, got {value!r}")
    try:
        result = int(value)
    except (TypeError, ValueError) as e:
        raise ArgumentError(f"{name} must be an integer, got {value!r}") from e
    if result < 0:
        raise ArgumentError(f"{name} must be non-negative, got {value}")
    return result


class TransactionBuilder:
    """
    Builds and signs settlement transactions.

    The builder borrows the signer's identity for the ``from`` field and
    never submits anything; submission is a separate step.

    Nonces are wall-clock milliseconds. Two transactions built by the same
    signer within one millisecond share a nonce; the settlement service
    decides which one wins. Callers that need strict ordering must
    serialize their own calls.
    """

    def __init__(self, signer: Signer, registry: TokenRegistry, logger: Optional[logging.Logger] = None):
        self.signer = signer
        self.registry = registry
        self.logger = logger or logging.getLogger(__name__)

    def build_and_sign_raw(
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
    ) -> Transaction:
        """
        Build and sign a transaction from explicit settlement parameters.

        Args:
            token_symbol: Token symbol as registered on the settlement network
            action: One of transfer, mint, burn
            fee: Fee in the token's smallest unit
            fee_recipient: Address receiving the fee
            token_id: On-chain token id
            chain_type: Chain type(s) of the token
            chain_id: Chain id(s) of the token
            receiver: Destination address
            amount: Amount in the token's smallest unit
            data: Opaque payload (typically JSON)

        Returns:
            Signed, submission-ready transaction

        Raises:
            ArgumentError: If amount or fee is not a non-negative integer
            SigningError: If the signer fails
            AddressError: If the signer's address cannot be derived
        """
        amount = _non_negative_int("amount", amount)
        fee = _non_negative_int("fee", fee)

        unsigned = Transaction(
            token_symbol=token_symbol,
            action=action,
            from_address=self.signer.wallet_address(),
            to=receiver,
            amount=str(amount),
            fee=str(fee),
            fee_recipient=fee_recipient,
            nonce=str(get_nonce()),
            token_id=token_id,
            chain_type=chain_type,
            chain_id=chain_id,
            data=data,
            version=TX_VERSION_V1,
            sig="",
        )
        sig = self.signer.sign(unsigned.sig_msg())
        self.logger.debug(
            f"Signed {action} of {unsigned.amount} {token_symbol} to {receiver} (nonce {unsigned.nonce})"
        )
        return unsigned.model_copy(update={"sig": sig})

    def build_and_sign_transfer(self, symbol: str, receiver: str, amount: int, data: str) -> Transaction:
        """
        Build and sign a transfer, resolving token identity and fee from the registry.

        Raises:
            UnknownTokenError: If ``symbol`` is not registered
            ArgumentError: If ``amount`` is not a non-negative integer
            DecodeError: If the registered transfer fee is not an integer
            SigningError: If the signer fails
        """
        token = self.registry.resolve(symbol)
        try:
            fee = int(token.transfer_fee)
        except ValueError as e:
            raise DecodeError(
                f"Invalid transfer fee for token {token.symbol}: {token.transfer_fee!r}"
            ) from e
        return self.build_and_sign_raw(
            token_symbol=token.symbol,
            action=TX_ACTION_TRANSFER,
            fee=fee,
            fee_recipient=self.registry.fee_recipient,
            token_id=token.id,
            chain_type=token.chain_type,
            chain_id=token.chain_id,
            receiver=receiver,
            amount=amount,
            data=data,
        )

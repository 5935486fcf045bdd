"""
Token registry for the everPay settlement service.

The registry is held as an immutable snapshot. ``refresh`` builds a
complete new snapshot and swaps it in with a single assignment, so readers
always see either the old or the new state, never a mix.
"""
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from ..exceptions import UnknownTokenError
from .types import Token, TokenInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrySnapshot:
    """
    Immutable view of the settlement service's token list.

    Attributes:
        tokens: Token tag -> token descriptor
        symbol_to_tag: Lowercased symbol -> token tag
        fee_recipient: Address that receives transfer fees
    """
    tokens: Mapping[str, Token] = field(default_factory=lambda: MappingProxyType({}))
    symbol_to_tag: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    fee_recipient: str = ""

    @classmethod
    def from_info(cls, info: TokenInfo) -> "RegistrySnapshot":
        tokens: Dict[str, Token] = {}
        symbol_to_tag: Dict[str, str] = {}
        for token in info.token_list:
            symbol = token.symbol.lower()
            if symbol in symbol_to_tag and symbol_to_tag[symbol] != token.tag:
                logger.warning(
                    f"Symbol {token.symbol} maps to both {symbol_to_tag[symbol]} and {token.tag}; "
                    f"using {token.tag}"
                )
            tokens[token.tag] = token
            symbol_to_tag[symbol] = token.tag
        return cls(
            tokens=MappingProxyType(tokens),
            symbol_to_tag=MappingProxyType(symbol_to_tag),
            fee_recipient=info.fee_recipient,
        )


class TokenRegistry:
    """Currency symbol -> token descriptor resolution"""

    def __init__(self, fetch_info: Callable[[], TokenInfo], logger: Optional[logging.Logger] = None):
        """
        Args:
            fetch_info: Callable returning the service's current ``TokenInfo``
            logger: Optional logger instance
        """
        self._fetch_info = fetch_info
        self._snapshot = RegistrySnapshot()
        self.logger = logger or logging.getLogger(__name__)

    @property
    def snapshot(self) -> RegistrySnapshot:
        return self._snapshot

    @property
    def fee_recipient(self) -> str:
        return self._snapshot.fee_recipient

    def refresh(self) -> None:
        """
        Fetch the token list and replace the registry contents.

        On any failure the previous contents stay in place.

        Raises:
            NetworkError: If the service cannot be reached
            DecodeError: If the response cannot be decoded
            APIError: If the service returns an error
        """
        info = self._fetch_info()
        snapshot = RegistrySnapshot.from_info(info)
        self._snapshot = snapshot
        self.logger.debug(f"Token registry refreshed: {len(snapshot.tokens)} tokens")

    def resolve(self, symbol: str) -> Token:
        """
        Resolve a currency symbol (case-insensitive) to its token.

        Raises:
            UnknownTokenError: If no token is registered under that symbol
        """
        snapshot = self._snapshot
        tag = snapshot.symbol_to_tag.get(symbol.lower())
        if tag is None:
            raise UnknownTokenError(symbol)
        return snapshot.tokens[tag]

    def tokens(self) -> Dict[str, Token]:
        return dict(self._snapshot.tokens)

    def symbol_to_tag(self) -> Dict[str, str]:
        return dict(self._snapshot.symbol_to_tag)

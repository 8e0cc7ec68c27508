"""
Per-network registry of stata tokens and the roles of related tokens.
"""

import logging
from typing import Dict, Iterable, List, Optional

from .types import StataToken, TokenRole

logger = logging.getLogger(__name__)


class TokenRegistry:
    """
    Maps token addresses to their TokenRole on each network.

    A stata token is registered as WRAPPED, its underlying as UNDERLYING and
    its aToken as INTERMEDIATE. Lookups are case-insensitive.
    """

    def __init__(self):
        self._roles: Dict[str, Dict[str, TokenRole]] = {}
        self._tokens: Dict[str, Dict[str, StataToken]] = {}

    def set_tokens_on_network(self, network: str, tokens: Iterable[StataToken]) -> None:
        """Replace the registered token list for a network."""
        roles: Dict[str, TokenRole] = {}
        by_address: Dict[str, StataToken] = {}

        for token in tokens:
            stata = token.address.lower()
            roles[stata] = TokenRole.WRAPPED
            roles[token.underlying.lower()] = TokenRole.UNDERLYING
            roles[token.a_token.lower()] = TokenRole.INTERMEDIATE
            by_address[stata] = token

        self._roles[network] = roles
        self._tokens[network] = by_address
        logger.info(f"Registered {len(by_address)} stata tokens on {network}")

    def resolve_role(self, network: str, token_address: str) -> Optional[TokenRole]:
        """Return the role of token_address, or None if it is not registered."""
        return self._roles.get(network, {}).get(token_address.lower())

    def get_stata_tokens(self, network: str) -> List[StataToken]:
        return list(self._tokens.get(network, {}).values())

    def get_stata_token(self, network: str, address: str) -> Optional[StataToken]:
        return self._tokens.get(network, {}).get(address.lower())

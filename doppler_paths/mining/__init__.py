"""CREATE2 salt search."""

from .flag_miner import MinedSalt, mine_hook_and_token
from .order_miner import OrderedSalt, generate_salt, mine_ordering
from .prefix_miner import PrefixMatch, mine_token_prefix

__all__ = [
    "MinedSalt",
    "OrderedSalt",
    "PrefixMatch",
    "generate_salt",
    "mine_hook_and_token",
    "mine_ordering",
    "mine_token_prefix",
]

"""
Token helper: deterministic wallets, native and ERC-20 balances, token
transfers, transfer history and DEX spot prices on EVM chains.

Create a WalletSession per wallet, or use the module-level functions, which
act on the shared default session `token_session`.
"""
from typing import Any, Awaitable, Callable, List, Mapping, Optional

from token_helper.mnemonic import (
    WalletData,
    create_mnemonic,
    derivation_path,
    derive_wallet,
    mnemonic_to_seed,
)
from token_helper.session import (
    InitializationError,
    SessionNotInitializedError,
    TokenDescriptor,
    WalletSession,
)
from token_helper.transactions import TokenTransaction

# Default session shared by the module-level functions
token_session = WalletSession()

init: Callable[[Optional[Mapping[str, Any]]], Awaitable[None]] = token_session.init
new_account: Callable[..., str] = token_session.new_account
get_balance: Callable[[str], Awaitable[int]] = token_session.get_balance
get_token_balance: Callable[[str], Awaitable[int]] = token_session.get_token_balance
send_tokens: Callable[..., Awaitable[Any]] = token_session.send_tokens
get_token_transactions: Callable[..., Awaitable[List[TokenTransaction]]] = token_session.get_token_transactions
get_exchange_rate: Callable[[str, str], Awaitable[float]] = token_session.get_exchange_rate

__all__ = [
    'WalletSession',
    'token_session',
    'init',
    'new_account',
    'get_balance',
    'get_token_balance',
    'send_tokens',
    'get_token_transactions',
    'get_exchange_rate',
    'create_mnemonic',
    'mnemonic_to_seed',
    'derivation_path',
    'derive_wallet',
    'InitializationError',
    'SessionNotInitializedError',
    'TokenDescriptor',
    'TokenTransaction',
    'WalletData',
]

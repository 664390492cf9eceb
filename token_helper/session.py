"""
WalletSession - the token helper facade.

A session holds one mnemonic, the seed derived from it, a token descriptor,
an optional DEX factory address, an RPC client and the current wallet. All
query and send operations require a prior successful init().
"""
import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, TypedDict, Union
from web3 import Web3
from web3.contract import Contract
from token_helper import balance, exchange, send, transactions
from token_helper.mnemonic import (
    WalletData,
    create_mnemonic,
    derivation_path,
    derive_wallet,
    is_valid_mnemonic,
    mnemonic_to_seed,
)
from token_helper.transactions import TokenTransaction
from token_helper.utils.config import DEFAULT_BLOCK_WINDOW, DEFAULT_DERIVATION_PATH
from token_helper.utils.status_updates import StatusCallback
from token_helper.utils.web3_connection import create_web3

logger = logging.getLogger(__name__)

class TokenDescriptor(TypedDict):
    """TypedDict for the token a session works with"""
    abi: Union[str, List[Dict[str, Any]]]
    contract_address: str

class InitializationError(ValueError):
    """Raised by init() when a required configuration value is missing."""

class SessionNotInitializedError(RuntimeError):
    """Raised when an operation needs session state that is not there yet."""

class SessionConfig:
    """Mutable state of one session."""

    def __init__(
        self,
        mnemonic: str,
        index: Union[int, float],
        token: TokenDescriptor,
        seed: bytes,
        w3: Web3,
        exchange_factory_address: Optional[str] = None
    ) -> None:
        self.mnemonic = mnemonic
        self.index = index
        self.token = token
        self.seed = seed
        self.w3 = w3
        self.exchange_factory_address = exchange_factory_address
        self.wallet: Optional[WalletData] = None

def _validate_init_data(data: Optional[Mapping[str, Any]]) -> None:
    if data is None:
        raise InitializationError("You must provide initialization values")

    index = data.get('index')
    if isinstance(index, bool) or not isinstance(index, (int, float)):
        raise InitializationError("No wallet index provided")

    if not data.get('provider'):
        raise InitializationError("No WS provider supplied")

    token = data.get('token')
    if not token:
        raise InitializationError("No token JSON supplied")
    if not isinstance(token, Mapping) or not token.get('abi'):
        raise InitializationError("No token JSON ABI supplied")
    if not token.get('contract_address'):
        raise InitializationError("No token JSON contract address provided")

class WalletSession:
    """
    Facade over wallet derivation, balance queries, token transfers,
    transfer history and DEX pricing.

    Each session is independent. Callers must serialize their own use of a
    single session; nothing here guards against concurrent re-initialization.
    """

    def __init__(self) -> None:
        self._config: Optional[SessionConfig] = None

    @property
    def is_initialized(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> SessionConfig:
        """The session configuration; raises if init() has not succeeded yet."""
        if self._config is None:
            raise SessionNotInitializedError("Token helper session is not initialized; call init() first")
        return self._config

    @property
    def wallet(self) -> WalletData:
        """The current wallet; raises if new_account() has not been called."""
        wallet = self.config.wallet
        if wallet is None:
            raise SessionNotInitializedError("No wallet derived for this session; call new_account() first")
        return wallet

    async def init(self, data: Optional[Mapping[str, Any]]) -> None:
        """
        Validate configuration and (re)initialize the session.

        Any previous session state is replaced. If no mnemonic is given a new
        one is generated.

        Args:
            data: Mapping with index, provider, token (abi, contract_address),
                and optionally mnemonic and exchange_factory_address

        Raises:
            InitializationError: If a required value is missing, checked in
                the order index, provider, token, token abi, token address
        """
        _validate_init_data(data)

        mnemonic = data.get('mnemonic')
        if not mnemonic:
            logger.info("token-helper init called with no mnemonic, creating one")
            mnemonic = create_mnemonic()
        elif not is_valid_mnemonic(mnemonic):
            logger.warning("Mnemonic failed BIP-39 validation; deriving seed anyway")

        seed = await asyncio.to_thread(mnemonic_to_seed, mnemonic)
        w3 = create_web3(data['provider'])

        token = data['token']
        self._config = SessionConfig(
            mnemonic=mnemonic,
            index=data['index'],
            token={'abi': token['abi'], 'contract_address': token['contract_address']},
            seed=seed,
            w3=w3,
            exchange_factory_address=data.get('exchange_factory_address') or data.get('exchangeFactoryAddress'),
        )
        logger.info(f"Session initialized for token {token['contract_address']}")

    def new_account(self, index: Optional[int] = None) -> str:
        """
        Derive a wallet, make it the session wallet and return its address.

        Without an index the fixed path m/44'/60'/0'/0/0 is used; the
        configured wallet index does not change it. Passing an index derives
        at derivation_path(index) instead.

        Returns:
            str: The wallet address
        """
        config = self.config
        if index is None:
            path = DEFAULT_DERIVATION_PATH
        else:
            path = derivation_path(index)

        config.wallet = derive_wallet(config.seed, path, index=index)
        logger.info(f"Derived account {config.wallet['address']} at {path}")
        return config.wallet['address']

    def token_contract(self) -> Contract:
        """Build a contract binding for the session token."""
        config = self.config
        return balance.get_token_contract(config.w3, config.token['abi'], config.token['contract_address'])

    async def get_balance(self, address: str) -> int:
        """Return the raw native-currency balance of an address."""
        return await balance.get_native_balance(self.config.w3, address)

    async def get_token_balance(self, address: str) -> int:
        """Return the raw token balance of an address."""
        return await balance.get_token_balance(self.config.w3, self.token_contract(), address)

    async def send_tokens(
        self,
        from_address: str,
        to_address: str,
        amount: int,
        status_callback: Optional[StatusCallback] = None
    ) -> Any:
        """
        Transfer tokens, signing with the session wallet.

        Args:
            from_address (str): Sender address
            to_address (str): Recipient address
            amount (int): Amount in the token's smallest unit
            status_callback (Optional[StatusCallback]): Function to call with status updates

        Returns:
            The transaction receipt
        """
        config = self.config
        private_key = self.wallet['private_key']
        return await send.send_tokens(
            config.w3,
            self.token_contract(),
            private_key,
            from_address,
            to_address,
            amount,
            status_callback
        )

    async def get_token_transactions(
        self,
        block_window: int = DEFAULT_BLOCK_WINDOW,
        wallet_only: bool = False,
        status_callback: Optional[StatusCallback] = None
    ) -> List[TokenTransaction]:
        """
        List token method calls in the last block_window blocks plus the head.

        By default every decodable call is returned, whoever sent it. Set
        wallet_only to keep only calls from or to the session wallet.
        """
        config = self.config
        wallet_address = config.wallet['address'].lower() if config.wallet else None
        if wallet_only and wallet_address is None:
            raise SessionNotInitializedError("No wallet derived for this session; call new_account() first")

        return await transactions.get_token_transactions(
            config.w3,
            self.token_contract(),
            block_window=block_window,
            wallet_address=wallet_address,
            wallet_only=wallet_only,
            status_callback=status_callback
        )

    async def get_exchange_rate(self, base_address: str, quote_address: str) -> float:
        """Return the spot price of base in quote from the factory's pair."""
        config = self.config
        if not config.exchange_factory_address:
            raise ValueError("No exchange factory address configured")

        return await exchange.get_exchange_rate(
            config.w3,
            config.exchange_factory_address,
            base_address,
            quote_address
        )

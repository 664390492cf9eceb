"""
Mnemonic wallet functionality for generating seed phrases and deriving HD wallets.
"""
import secrets
from typing import Optional, TypedDict
from eth_account import Account
from eth_account.hdaccount import key_from_seed
from mnemonic import Mnemonic
from token_helper.utils.config import ACCOUNT_PATH_TEMPLATE, DEFAULT_DERIVATION_PATH, MNEMONIC_STRENGTH

class WalletData(TypedDict):
    """TypedDict for a derived wallet"""
    address: str
    private_key: str
    path: str
    index: Optional[int]

def create_mnemonic(strength: int = MNEMONIC_STRENGTH) -> str:
    """
    Generate a new mnemonic phrase (seed phrase).

    Args:
        strength (int): Bit strength of the mnemonic (128, 160, 192, 224, 256)
                        128 bits = 12 words, 256 bits = 24 words

    Returns:
        str: A space-separated mnemonic phrase
    """
    entropy = secrets.token_bytes(strength // 8)

    mnemo = Mnemonic("english")
    return mnemo.to_mnemonic(entropy)

def is_valid_mnemonic(mnemonic: str) -> bool:
    """Check the BIP-39 word list and checksum of a phrase."""
    try:
        return Mnemonic("english").check(mnemonic)
    except (ValueError, LookupError):
        return False

def mnemonic_to_seed(mnemonic: str, passphrase: str = "") -> bytes:
    """
    Derive the 64-byte BIP-39 seed for a mnemonic phrase.

    The phrase is not validated here; any string yields a seed.
    """
    return Mnemonic.to_seed(mnemonic, passphrase=passphrase)

def derivation_path(index: int, account_path_template: Optional[str] = None) -> str:
    """
    Build the BIP-44 derivation path for an account index.

    Args:
        index (int): Index of the account
        account_path_template (Optional[str]): Template with {} placeholder for the index

    Returns:
        str: The derivation path, e.g. m/44'/60'/0'/0/3
    """
    if account_path_template is None:
        account_path_template = ACCOUNT_PATH_TEMPLATE

    if index < 0:
        raise ValueError(f"Account index must be non-negative, got {index}")

    return account_path_template.format(index)

def derive_wallet(seed: bytes, account_path: Optional[str] = None, index: Optional[int] = None) -> WalletData:
    """
    Derive a wallet from a BIP-39 seed.

    Args:
        seed (bytes): Seed from mnemonic_to_seed
        account_path (Optional[str]): Derivation path (if None, uses DEFAULT_DERIVATION_PATH)
        index (Optional[int]): Account index the path was built from, if any

    Returns:
        WalletData: Address, private key and derivation details
    """
    if account_path is None:
        account_path = DEFAULT_DERIVATION_PATH

    private_key = key_from_seed(seed, account_path)
    account = Account.from_key(private_key)

    return {
        'address': account.address,
        'private_key': '0x' + private_key.hex(),
        'path': account_path,
        'index': index,
    }

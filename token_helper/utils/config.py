"""
Configuration module to handle environment variables.
"""
import os
from typing import Any
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

def get_env_var(name: str, default: Any = None) -> Any:
    """
    Get an environment variable or return a default value if not found.

    Args:
        name (str): The name of the environment variable
        default: The default value to return if the variable is not found

    Returns:
        The value of the environment variable or the default value
    """
    value = os.getenv(name, default)
    if value is None:
        raise ValueError(f"Environment variable {name} not found and no default provided")
    return value

def get_bool_env_var(name: str, default: bool = False) -> bool:
    """Read a boolean flag such as TOKEN_HELPER_POA=true."""
    value = get_env_var(name, str(default))
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')

# Block scan settings
DEFAULT_BLOCK_WINDOW: int = int(get_env_var('TOKEN_HELPER_BLOCK_WINDOW', 1000))

# RPC settings
RPC_REQUEST_TIMEOUT: int = int(get_env_var('TOKEN_HELPER_RPC_TIMEOUT', 30))  # Seconds per HTTP request
RECEIPT_TIMEOUT: int = int(get_env_var('TOKEN_HELPER_RECEIPT_TIMEOUT', 120))  # Seconds to wait for a transfer receipt
POA_CHAIN: bool = get_bool_env_var('TOKEN_HELPER_POA', False)  # BSC and other PoA chains need extraData handling

# Wallet derivation path settings
DEFAULT_DERIVATION_PATH: str = "m/44'/60'/0'/0/0"  # Default path for first Ethereum account
ACCOUNT_PATH_TEMPLATE: str = "m/44'/60'/0'/0/{}"   # Template for deriving multiple accounts
MNEMONIC_STRENGTH: int = 128  # 12 words

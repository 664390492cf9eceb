"""
Balance checking module for the native currency and ERC-20 tokens.
"""
import asyncio
from typing import Any, Dict, List, Union
from web3 import Web3
from web3.contract import Contract

def get_token_contract(w3: Web3, abi: Union[str, List[Dict[str, Any]]], contract_address: str) -> Contract:
    """
    Create a token contract binding from the session's token descriptor.

    Args:
        w3 (Web3): RPC client
        abi: Token ABI, as a list or JSON string
        contract_address (str): Token contract address

    Returns:
        Contract: The web3 contract instance
    """
    return w3.eth.contract(address=w3.to_checksum_address(contract_address), abi=abi)

async def get_native_balance(w3: Web3, address: str) -> int:
    """Return the raw native-currency balance (in wei) of an address."""
    return await asyncio.to_thread(w3.eth.get_balance, w3.to_checksum_address(address))

async def get_token_balance(w3: Web3, token_contract: Contract, address: str) -> int:
    """Return the raw balanceOf() result of a token for an address."""
    balance_call = token_contract.functions.balanceOf(w3.to_checksum_address(address))
    return await asyncio.to_thread(balance_call.call)

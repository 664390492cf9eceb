"""
Token transfer history: scans recent blocks for calls to the session's token ABI.
"""
import asyncio
import logging
from typing import Any, List, Mapping, Optional, Tuple, TypedDict
from eth_abi.exceptions import DecodingError
from web3 import Web3
from web3.contract import Contract
from web3.exceptions import Web3Exception
from token_helper.utils.config import DEFAULT_BLOCK_WINDOW
from token_helper.utils.status_updates import StatusCallback, report_status

logger = logging.getLogger(__name__)

TokenTransaction = TypedDict('TokenTransaction', {
    'hash': str,
    'from': str,
    'to': Optional[Any],
    'amount': Optional[Any],
    'gas': int,
    'block_number': int,
    'method': str,
})

def decode_token_input(token_contract: Contract, input_data: Any) -> Optional[Tuple[str, List[Any]]]:
    """
    Decode transaction input against the token ABI.

    Args:
        token_contract (Contract): Token contract binding carrying the ABI
        input_data: Raw transaction input (hex string or bytes)

    Returns:
        Optional[Tuple[str, List[Any]]]: Function name and positional arguments,
        or None if the input is not a call to a known method
    """
    if not input_data:
        return None

    try:
        func, params = token_contract.decode_function_input(input_data)
    except (ValueError, DecodingError, Web3Exception) as e:
        logger.debug(f"Skipping undecodable input: {e}")
        return None

    return func.fn_name, list(params.values())

def _hex(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return Web3.to_hex(value)
    return str(value)

def _to_record(tx: Mapping[str, Any], block_number: int, decoded: Tuple[str, List[Any]]) -> TokenTransaction:
    method, args = decoded
    return {
        'hash': _hex(tx['hash']),
        'from': tx['from'],
        'to': args[0] if len(args) > 0 else None,
        'amount': args[1] if len(args) > 1 else None,
        'gas': tx['gas'],
        'block_number': block_number,
        'method': method,
    }

def _touches_wallet(record: TokenTransaction, wallet_address: str) -> bool:
    candidates = (record['from'], record['to'])
    return any(isinstance(c, str) and c.lower() == wallet_address for c in candidates)

async def get_token_transactions(
    w3: Web3,
    token_contract: Contract,
    block_window: int = DEFAULT_BLOCK_WINDOW,
    wallet_address: Optional[str] = None,
    wallet_only: bool = False,
    status_callback: Optional[StatusCallback] = None
) -> List[TokenTransaction]:
    """
    List decodable token method calls in the most recent blocks.

    Blocks are fetched one by one from max(head - block_window, 0) up to the
    current head, inclusive. Results keep block order and the chain's order
    inside each block.

    Args:
        w3 (Web3): RPC client
        token_contract (Contract): Token contract binding used for decoding
        block_window (int): Number of blocks before the head to include
        wallet_address (Optional[str]): Session wallet address
        wallet_only (bool): Keep only calls sent from or addressed to wallet_address
        status_callback (Optional[StatusCallback]): Function to call with status updates

    Returns:
        List[TokenTransaction]: Decoded token calls
    """
    if block_window < 0:
        raise ValueError(f"Block window must be non-negative, got {block_window}")

    wallet = wallet_address.lower() if wallet_address else None
    if wallet_only and wallet is None:
        raise ValueError("A wallet address is required to filter transactions by wallet")

    end_block = await asyncio.to_thread(getattr, w3.eth, 'block_number')
    start_block = max(end_block - block_window, 0)

    await report_status(status_callback, f"Scanning blocks {start_block} to {end_block}...")

    records: List[TokenTransaction] = []
    for block_number in range(start_block, end_block + 1):
        block = await asyncio.to_thread(w3.eth.get_block, block_number, full_transactions=True)
        transactions = block['transactions']
        logger.debug(f"Block {block_number}: {len(transactions)} transactions")

        for tx in transactions:
            decoded = decode_token_input(token_contract, tx['input'])
            if decoded is None:
                continue

            record = _to_record(tx, block_number, decoded)
            if wallet_only and not _touches_wallet(record, wallet):
                continue
            records.append(record)

    await report_status(status_callback, f"Found {len(records)} token transactions")
    return records

"""
Spot exchange rate from a Uniswap-V2 style liquidity pair.
"""
import asyncio
import logging
from web3 import Web3
from token_helper.utils.load_abi import ERC20_ABI, FACTORY_ABI, PAIR_ABI

logger = logging.getLogger(__name__)

ZERO_ADDRESS = '0x0000000000000000000000000000000000000000'

async def get_exchange_rate(w3: Web3, factory_address: str, base_address: str, quote_address: str) -> float:
    """
    Compute the spot price of a pair from its reserves.

    reserve0 is scaled by the quote token's decimals and reserve1 by the base
    token's decimals; the price is scaled reserve1 / scaled reserve0.

    Args:
        w3 (Web3): RPC client
        factory_address (str): DEX factory contract address
        base_address (str): Base token address
        quote_address (str): Quote token address

    Returns:
        float: The exchange rate

    Raises:
        ValueError: If the factory has no pair for the tokens or the pair has no liquidity
    """
    checksum_base = w3.to_checksum_address(base_address)
    checksum_quote = w3.to_checksum_address(quote_address)

    factory_contract = w3.eth.contract(address=w3.to_checksum_address(factory_address), abi=FACTORY_ABI)
    quote_contract = w3.eth.contract(address=checksum_quote, abi=ERC20_ABI)
    base_contract = w3.eth.contract(address=checksum_base, abi=ERC20_ABI)

    quote_decimals = await asyncio.to_thread(quote_contract.functions.decimals().call)
    base_decimals = await asyncio.to_thread(base_contract.functions.decimals().call)

    pair_call = factory_contract.functions.getPair(checksum_base, checksum_quote)
    pair_address = await asyncio.to_thread(pair_call.call)
    if not pair_address or pair_address == ZERO_ADDRESS:
        raise ValueError(f"No liquidity pair for {checksum_base} and {checksum_quote}")

    pair_contract = w3.eth.contract(address=w3.to_checksum_address(pair_address), abi=PAIR_ABI)
    reserve0, reserve1, _ = await asyncio.to_thread(pair_contract.functions.getReserves().call)

    if reserve0 == 0:
        raise ValueError(f"Pair {pair_address} has no liquidity")

    scaled_reserve0 = reserve0 / (10 ** quote_decimals)
    scaled_reserve1 = reserve1 / (10 ** base_decimals)
    price = scaled_reserve1 / scaled_reserve0

    logger.info(f"Pair {pair_address}: reserves {reserve0}/{reserve1}, price {price}")
    return float(price)

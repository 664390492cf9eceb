"""
Gas estimation utilities for token transfers.
"""
import asyncio
from typing import Optional
from web3.contract import Contract
from token_helper.utils.status_updates import StatusCallback, report_status

async def estimate_token_transfer_gas(
    token_contract: Contract,
    from_address: str,
    to_address: str,
    amount: int,
    status_callback: Optional[StatusCallback] = None
) -> int:
    """
    Estimate gas for a token transfer.

    Args:
        token_contract (Contract): Token contract binding
        from_address (str): Sender address, used as the calling account
        to_address (str): Recipient address
        amount (int): Amount in the token's smallest unit
        status_callback (Optional[StatusCallback]): Function to call with status updates

    Returns:
        int: Gas units needed for the transfer
    """
    await report_status(status_callback, "Estimating gas for token transfer...")

    try:
        transfer_call = token_contract.functions.transfer(to_address, amount)
        gas_estimate = await asyncio.to_thread(transfer_call.estimate_gas, {'from': from_address})
    except Exception as e:
        await report_status(status_callback, f"Error estimating gas for token transfer: {str(e)}")
        raise

    await report_status(status_callback, f"Gas estimate: {gas_estimate} units")
    return gas_estimate

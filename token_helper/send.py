"""
Transaction sending module for ERC-20 tokens.
"""
import asyncio
import logging
from typing import Any, Optional
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.contract import Contract
from web3.middleware import SignAndSendRawMiddlewareBuilder
from token_helper.utils.config import RECEIPT_TIMEOUT
from token_helper.utils.gas_estimation import estimate_token_transfer_gas
from token_helper.utils.status_updates import StatusCallback, report_status

logger = logging.getLogger(__name__)

SIGNER_MIDDLEWARE_NAME = 'token_helper_signer'

def register_signer(w3: Web3, private_key: str) -> LocalAccount:
    """
    Make a private key the only local signer of a Web3 client.

    Any signer registered by an earlier call is dropped first, so exactly one
    account can sign at a time.

    Args:
        w3 (Web3): RPC client
        private_key (str): Hex private key of the sending wallet

    Returns:
        LocalAccount: The account now used to sign outgoing transactions
    """
    account: LocalAccount = Account.from_key(private_key)

    if SIGNER_MIDDLEWARE_NAME in w3.middleware_onion:
        w3.middleware_onion.remove(SIGNER_MIDDLEWARE_NAME)

    w3.middleware_onion.inject(
        SignAndSendRawMiddlewareBuilder.build(account),
        name=SIGNER_MIDDLEWARE_NAME,
        layer=0
    )
    return account

async def send_tokens(
    w3: Web3,
    token_contract: Contract,
    private_key: str,
    from_address: str,
    to_address: str,
    amount: int,
    status_callback: Optional[StatusCallback] = None
) -> Any:
    """
    Send ERC-20 tokens from the session wallet to another address.

    Args:
        w3 (Web3): RPC client
        token_contract (Contract): Token contract binding
        private_key (str): Private key of the session wallet
        from_address (str): Address of the sender, used as the calling account
        to_address (str): Address of the recipient
        amount (int): Amount in the token's smallest unit (no decimal scaling is applied)
        status_callback (Optional[StatusCallback]): Function to call with status updates

    Returns:
        The transaction receipt, as returned by the RPC client
    """
    await report_status(status_callback, "Converting addresses to checksum format...")

    checksum_from_address = w3.to_checksum_address(from_address)
    checksum_to_address = w3.to_checksum_address(to_address)

    await report_status(status_callback, "Registering signing account...")
    register_signer(w3, private_key)

    gas_estimate = await estimate_token_transfer_gas(
        token_contract,
        checksum_from_address,
        checksum_to_address,
        amount,
        status_callback
    )

    await report_status(status_callback, "Sending transaction to network...")

    try:
        transfer_call = token_contract.functions.transfer(checksum_to_address, amount)
        tx_hash = await asyncio.to_thread(transfer_call.transact, {
            'from': checksum_from_address,
            'gas': gas_estimate,
            'value': 0
        })
    except Exception as e:
        logger.error(f"Token transfer from {checksum_from_address} failed: {e}")
        await report_status(status_callback, f"Error: {str(e)}")
        raise

    tx_hash_hex = Web3.to_hex(tx_hash)
    logger.info(f"Token transfer submitted: {tx_hash_hex}")
    await report_status(status_callback, f"Transaction sent with hash: {tx_hash_hex}")
    await report_status(status_callback, "Waiting for transaction confirmation...")

    receipt = await asyncio.to_thread(w3.eth.wait_for_transaction_receipt, tx_hash, timeout=RECEIPT_TIMEOUT)

    await report_status(status_callback, f"Transaction confirmed in block {receipt['blockNumber']}")
    return receipt

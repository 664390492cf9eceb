"""
Tests for token transfers and signer registration.
"""
import time
from typing import Any, List
from unittest.mock import MagicMock

import pytest
from eth_account import Account
from hexbytes import HexBytes
from web3 import Web3

from token_helper.send import SIGNER_MIDDLEWARE_NAME, register_signer
from token_helper.session import SessionNotInitializedError
from token_helper.utils.load_abi import ERC20_ABI
from tests.mocks import HARDHAT_ACCOUNT_0, HARDHAT_KEY_0, TOKEN_ADDRESS, create_mock_web3, initialized_session, run_with_ticker

FROM_ADDRESS = "0x12345"
TO_ADDRESS = "0x67890"
AMOUNT = 1000
TX_HASH = HexBytes(b"\xab" * 32)


def _transfer_mock_web3() -> MagicMock:
    w3 = create_mock_web3()
    transfer_call = w3.eth.contract.return_value.functions.transfer.return_value
    transfer_call.estimate_gas.return_value = 1.0
    transfer_call.transact.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = {"blockNumber": 42, "status": 1}
    return w3


@pytest.mark.unit
class TestSendTokens:

    @pytest.mark.asyncio
    async def test_builds_contract_from_session_token(self) -> None:
        w3 = _transfer_mock_web3()
        session = await initialized_session(w3)
        session.new_account()

        await session.send_tokens(FROM_ADDRESS, TO_ADDRESS, AMOUNT)

        w3.eth.contract.assert_called_once_with(address=TOKEN_ADDRESS, abi=ERC20_ABI)

    @pytest.mark.asyncio
    async def test_transfers_amount_with_estimated_gas(self) -> None:
        w3 = _transfer_mock_web3()
        contract = w3.eth.contract.return_value
        session = await initialized_session(w3)
        session.new_account()

        await session.send_tokens(FROM_ADDRESS, TO_ADDRESS, AMOUNT)

        contract.functions.transfer.assert_called_with(TO_ADDRESS, AMOUNT)
        transfer_call = contract.functions.transfer.return_value
        transfer_call.estimate_gas.assert_called_once_with({"from": FROM_ADDRESS})
        transfer_call.transact.assert_called_once_with({
            "from": FROM_ADDRESS,
            "gas": 1.0,
            "value": 0,
        })

    @pytest.mark.asyncio
    async def test_returns_receipt_unmodified(self) -> None:
        w3 = _transfer_mock_web3()
        session = await initialized_session(w3)
        session.new_account()

        receipt = await session.send_tokens(FROM_ADDRESS, TO_ADDRESS, AMOUNT)

        assert receipt == {"blockNumber": 42, "status": 1}
        assert w3.eth.wait_for_transaction_receipt.call_args.args[0] == TX_HASH

    @pytest.mark.asyncio
    async def test_registers_session_wallet_as_signer(self) -> None:
        w3 = _transfer_mock_web3()
        session = await initialized_session(w3)
        session.new_account()

        await session.send_tokens(FROM_ADDRESS, TO_ADDRESS, AMOUNT)

        w3.middleware_onion.inject.assert_called_once()
        assert w3.middleware_onion.inject.call_args.kwargs["name"] == SIGNER_MIDDLEWARE_NAME

    @pytest.mark.asyncio
    async def test_requires_derived_wallet(self) -> None:
        w3 = _transfer_mock_web3()
        session = await initialized_session(w3)

        with pytest.raises(SessionNotInitializedError):
            await session.send_tokens(FROM_ADDRESS, TO_ADDRESS, AMOUNT)

        w3.eth.contract.return_value.functions.transfer.assert_not_called()

    @pytest.mark.asyncio
    async def test_gas_estimation_failure_propagates(self) -> None:
        w3 = _transfer_mock_web3()
        transfer_call = w3.eth.contract.return_value.functions.transfer.return_value
        transfer_call.estimate_gas.side_effect = ValueError("execution reverted")
        session = await initialized_session(w3)
        session.new_account()

        with pytest.raises(ValueError, match="execution reverted"):
            await session.send_tokens(FROM_ADDRESS, TO_ADDRESS, AMOUNT)

        transfer_call.transact.assert_not_called()

    @pytest.mark.asyncio
    async def test_submission_failure_propagates(self) -> None:
        w3 = _transfer_mock_web3()
        transfer_call = w3.eth.contract.return_value.functions.transfer.return_value
        transfer_call.transact.side_effect = ValueError("nonce too low")
        session = await initialized_session(w3)
        session.new_account()

        with pytest.raises(ValueError, match="nonce too low"):
            await session.send_tokens(FROM_ADDRESS, TO_ADDRESS, AMOUNT)

        w3.eth.wait_for_transaction_receipt.assert_not_called()

    @pytest.mark.asyncio
    async def test_reports_status(self) -> None:
        w3 = _transfer_mock_web3()
        session = await initialized_session(w3)
        session.new_account()
        messages: List[str] = []

        await session.send_tokens(FROM_ADDRESS, TO_ADDRESS, AMOUNT, status_callback=messages.append)

        assert any("Gas estimate" in m for m in messages)
        assert ("Transaction sent with hash: 0x" + "ab" * 32) in messages
        assert messages[-1] == "Transaction confirmed in block 42"


    @pytest.mark.asyncio
    async def test_event_loop_runs_while_waiting_for_receipt(self) -> None:
        def slow_receipt(tx_hash: Any, timeout: float) -> Any:
            time.sleep(0.2)
            return {"blockNumber": 42, "status": 1}

        w3 = _transfer_mock_web3()
        w3.eth.wait_for_transaction_receipt.side_effect = slow_receipt
        session = await initialized_session(w3)
        session.new_account()

        receipt, ticks = await run_with_ticker(session.send_tokens(FROM_ADDRESS, TO_ADDRESS, AMOUNT))

        assert receipt == {"blockNumber": 42, "status": 1}
        assert ticks >= 5


@pytest.mark.unit
class TestRegisterSigner:

    def test_returns_account_for_key(self) -> None:
        w3 = create_mock_web3()
        account = register_signer(w3, HARDHAT_KEY_0)
        assert account.address == HARDHAT_ACCOUNT_0

    def test_keeps_a_single_signer(self) -> None:
        w3 = Web3()
        layers_before = len(w3.middleware_onion)
        other_key = Account.create().key.hex()

        register_signer(w3, HARDHAT_KEY_0)
        register_signer(w3, other_key)

        assert SIGNER_MIDDLEWARE_NAME in w3.middleware_onion
        assert len(w3.middleware_onion) == layers_before + 1

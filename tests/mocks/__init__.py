"""
Mock objects for testing the token helper without a blockchain connection.
"""
from tests.mocks.event_loop import run_with_ticker
from tests.mocks.mock_web3 import (
    MockWeb3,
    approve_input,
    blocks_by_number,
    create_mock_web3,
    make_transaction,
    transfer_input,
)
from tests.mocks.session_data import (
    FACTORY_ADDRESS,
    HARDHAT_ACCOUNT_0,
    HARDHAT_ACCOUNT_1,
    HARDHAT_KEY_0,
    MOCK_INIT_DATA,
    TEST_MNEMONIC,
    TOKEN_ADDRESS,
    initialized_session,
)

__all__ = [
    'run_with_ticker',
    'MockWeb3',
    'approve_input',
    'blocks_by_number',
    'create_mock_web3',
    'make_transaction',
    'transfer_input',
    'FACTORY_ADDRESS',
    'HARDHAT_ACCOUNT_0',
    'HARDHAT_ACCOUNT_1',
    'HARDHAT_KEY_0',
    'MOCK_INIT_DATA',
    'TEST_MNEMONIC',
    'TOKEN_ADDRESS',
    'initialized_session',
]

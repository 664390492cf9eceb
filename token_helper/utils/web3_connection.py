"""
Web3 connection factory for token helper sessions.
"""
import logging
from web3 import Web3, IPCProvider, LegacyWebSocketProvider
from web3.middleware import ExtraDataToPOAMiddleware
from token_helper.utils.config import POA_CHAIN, RPC_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

def create_web3(provider_uri: str, poa: bool = POA_CHAIN) -> Web3:
    """
    Open a Web3 connection against the given endpoint.

    The provider class is picked from the URI scheme: http(s) uses
    HTTPProvider, ws(s) uses LegacyWebSocketProvider and anything else is
    treated as an IPC socket path.

    Args:
        provider_uri (str): RPC endpoint URI or IPC path
        poa (bool): Inject the PoA extraData middleware

    Returns:
        Web3: The Web3 connection instance
    """
    if not provider_uri:
        raise ValueError("No RPC provider URI given")

    scheme = provider_uri.split('://', 1)[0].lower() if '://' in provider_uri else ''

    if scheme in ('http', 'https'):
        provider = Web3.HTTPProvider(provider_uri, request_kwargs={'timeout': RPC_REQUEST_TIMEOUT})
    elif scheme in ('ws', 'wss'):
        provider = LegacyWebSocketProvider(provider_uri)
    else:
        provider = IPCProvider(provider_uri)

    w3 = Web3(provider)

    if poa:
        # Inject the PoA middleware at layer 0 (innermost layer)
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    logger.info(f"Opened {type(provider).__name__} connection")
    return w3

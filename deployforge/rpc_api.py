# -----------------------------------------------------------------------------
# Project: DeployForge v0.1
# File:    rpc_api.py
# (c)      2025-2026 Wolfgang Lohmann
# License: MIT
# -----------------------------------------------------------------------------

# rpc_api.py
'''
All functions related to the Ethereum JSON-RPC endpoint.
Thin wrappers over web3's AsyncWeb3 (aiohttp transport): errors are
logged and the functions return None.
'''

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional
import logging
import asyncio

import aiohttp
from eth_utils import to_hex
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import TimeExhausted, Web3Exception

from deployforge.config import Config

logger = logging.getLogger(__name__)

# everything a node or the transport can throw at us for a single call
RPC_ERRORS = (Web3Exception, aiohttp.ClientError, asyncio.TimeoutError, ValueError)


def make_web3(rpc_url: str) -> AsyncWeb3:
    """AsyncWeb3 for `rpc_url`, without the provider's built-in request retries."""
    provider = AsyncHTTPProvider(
        rpc_url,
        request_kwargs={"timeout": aiohttp.ClientTimeout(total=Config.TIMEOUT_CONNECT)},
        exception_retry_configuration=None,
    )
    return AsyncWeb3(provider)


@asynccontextmanager
async def connect(rpc_url: str) -> AsyncIterator[AsyncWeb3]:
    """Yields an AsyncWeb3 and closes the provider's aiohttp session afterwards."""
    w3 = make_web3(rpc_url)
    try:
        yield w3
    finally:
        await w3.provider.disconnect()


async def fetch_balance(rpc_url: str, address: str) -> Optional[int]:
    """Balance of `address` in wei at the latest block."""
    async with connect(rpc_url) as w3:
        try:
            return await w3.eth.get_balance(address)
        except RPC_ERRORS as e:
            logger.error(f"Failed to fetch balance for {address} from {rpc_url}: {e}")
            return None


async def send_transaction(w3: AsyncWeb3, tx: Dict[str, Any]) -> Optional[str]:
    """
    Sends `tx` through the signing middleware of `w3`.
    web3 fills nonce, gas, fee fields and chain id; returns the transaction hash.
    """
    logger.info(f"--- Broadcasting Transaction to {w3.provider.endpoint_uri} ---")
    try:
        tx_hash = await w3.eth.send_transaction(tx)
    except RPC_ERRORS as e:
        logger.error(f"Broadcast rejected: {e}")
        return None

    tx_hash_hex = to_hex(tx_hash)
    logger.info(f"Success: Transaction broadcasted with hash: {tx_hash_hex}")
    return tx_hash_hex


async def wait_for_receipt(
    w3: AsyncWeb3,
    tx_hash: str,
    timeout: Optional[float] = None,
    poll_interval: Optional[float] = None,
) -> Optional[Dict[str, Any]]:
    """
    Waits until `tx_hash` is mined. Returns None on timeout or RPC error.
    """
    timeout = Config.RECEIPT_TIMEOUT if timeout is None else timeout
    poll_interval = Config.RECEIPT_POLL_INTERVAL if poll_interval is None else poll_interval

    try:
        receipt = await w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout, poll_latency=poll_interval)
    except TimeExhausted:
        logger.warning(f"No receipt for {tx_hash} after {timeout} seconds.")
        return None
    except RPC_ERRORS as e:
        logger.error(f"Receipt lookup for {tx_hash} failed: {e}")
        return None

    logger.info(f"Receipt for {tx_hash} found in block {receipt.get('blockNumber')}")
    return dict(receipt)

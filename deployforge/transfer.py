# -----------------------------------------------------------------------------
# Project: DeployForge v0.1
# File:    transfer.py
# (c)      2025-2026 Wolfgang Lohmann
# License: MIT
# -----------------------------------------------------------------------------

import logging
from typing import Optional, Dict, Any

from eth_account.signers.local import LocalAccount
from web3.middleware import SignAndSendRawMiddlewareBuilder

from deployforge.config import Config
from deployforge import rpc_api
from deployforge.utils import format_ether

logger = logging.getLogger(__name__)


async def send_eth(
    account: LocalAccount,
    to: str,
    value_wei: int,
    rpc_url: str,
    wait: bool = True,
    receipt_timeout: Optional[float] = None,
) -> Optional[Dict[str, Any]]:
    """
    Sends `value_wei` from `account` to `to` and optionally waits for the receipt.

    Nonce, gas limit, fees and chain id are filled in by web3 when the
    signing middleware turns the request into eth_sendRawTransaction.

    Returns None if the broadcast failed. Otherwise returns a result dict;
    'status' is None when no receipt was obtained.
    """

    logger.info("--- Transfer from Deployer ---")
    logger.info(f"Network:        {Config.ACTIVE_NETWORK_NAME}")
    logger.info(f"Source address: {account.address}")
    logger.info(f"Destination:    {to}")
    logger.info(f"Amount:         {format_ether(value_wei)} ETH")

    async with rpc_api.connect(rpc_url) as w3:
        w3.middleware_onion.inject(SignAndSendRawMiddlewareBuilder.build(account), layer=0)

        tx_hash = await rpc_api.send_transaction(
            w3,
            {"from": account.address, "to": to, "value": value_wei},
        )
        if not tx_hash:
            logger.error("Broadcast failed.")
            return None

        receipt = None
        if wait:
            receipt = await rpc_api.wait_for_receipt(w3, tx_hash, timeout=receipt_timeout)

    status = None
    if receipt is not None:
        status = "Success" if receipt.get("status") == 1 else "Failed"

    return {
        "network": Config.ACTIVE_NETWORK_NAME,
        "source_address": account.address,
        "destination_address": to,
        "tx_hash": tx_hash,
        "value_wei": value_wei,
        "broadcasted": True,
        "receipt": receipt,
        "status": status,
    }

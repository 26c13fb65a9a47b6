#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Project: DeployForge v0.1
# File:    df_transfer.py
# (c)      2025-2026 Wolfgang Lohmann
# License: MIT
# -----------------------------------------------------------------------------

# Purpose: Manually transfer ETH out of the encrypted deployer wallet (.env).
"""
python df_transfer.py
    prompts for password, recipient, amount and RPC URL

python df_transfer.py --to 0xAbc... --amount 0.05 --rpc-url https://sepolia.drpc.org --yes
    only the password is prompted

--env-file       path to the deployer .env (default: ./.env)
--no-wait        broadcast only, do not wait for the receipt
--receipt-timeout seconds to wait for the receipt
"""
# -----------------------------------------------------------------------------

import argparse
import asyncio
import getpass
import logging
import sys
from typing import List, NoReturn, Optional

from deployforge.config import Config, ConfigError
from deployforge import rpc_api
from deployforge import transfer
from deployforge.utils import (
    configure_logging,
    format_ether,
    normalize_address,
    parse_ether,
    validate_rpc_url,
)
from deployforge.wallet_manager import WalletDecryptError, decrypt_deployer_wallet, keystore_address

logger = logging.getLogger(__name__)


def fail(message: str) -> NoReturn:
    print(f"❌ {message}", file=sys.stderr)
    sys.exit(1)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Transfer ETH from the encrypted deployer account.")
    parser.add_argument("--env-file", type=str, default=None, help="Path to the deployer .env file.")
    parser.add_argument("--to", type=str, default=None, help="Recipient address (prompted if omitted).")
    parser.add_argument("--amount", type=str, default=None, help="Amount of ETH to send (prompted if omitted).")
    parser.add_argument("--rpc-url", type=str, default=None, help="JSON-RPC endpoint (prompted if omitted).")
    parser.add_argument("--yes", "-y", action="store_true", help="Skip the confirmation prompt.")
    parser.add_argument("--no-wait", action="store_true", help="Do not wait for the transaction receipt.")
    parser.add_argument("--receipt-timeout", type=float, default=None,
                        help=f"Seconds to wait for the receipt (default: {Config.RECEIPT_TIMEOUT}).")
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    # 1. environment
    try:
        Config.load_env(args.env_file)
    except ConfigError:
        fail(".env file not found. Please generate a deployer account first.")

    try:
        Config.validate_deployer_config()
    except ConfigError as e:
        fail(str(e))

    configure_logging(Config.LOG_FILE)
    assert Config.DEPLOYER_PRIVATE_KEY_ENCRYPTED is not None, "Keystore not set (should be validated)"

    # 2. decrypt
    logger.info(f"Deployer keystore loaded from {Config.ENV_PATH} (address: {keystore_address(Config.DEPLOYER_PRIVATE_KEY_ENCRYPTED)})")
    password = getpass.getpass("Enter password to decrypt deployer private key: ")
    try:
        wallet = decrypt_deployer_wallet(Config.DEPLOYER_PRIVATE_KEY_ENCRYPTED, password)
    except WalletDecryptError:
        fail("Failed to decrypt wallet. Check your password.")

    # 3. recipient
    to_input = args.to if args.to is not None else input("Enter recipient address: ")
    try:
        to = normalize_address(to_input)
    except ValueError:
        fail("Invalid recipient address.")

    # 4. amount
    amount_input = args.amount if args.amount is not None else input("Enter amount of ETH to send: ")
    try:
        amount = parse_ether(amount_input)
    except ValueError:
        fail("Invalid amount.")

    # 5. RPC endpoint
    rpc_url = args.rpc_url
    if rpc_url is None:
        rpc_url = input(f"Enter RPC URL (leave blank for default: {Config.DEFAULT_RPC_URL}): ")
    rpc_url = rpc_url.strip() or Config.DEFAULT_RPC_URL
    if not validate_rpc_url(rpc_url):
        fail("Invalid RPC URL.")

    # 6. balance
    balance = await rpc_api.fetch_balance(rpc_url, wallet.address)
    if balance is None:
        fail("Failed to fetch deployer balance.")

    print(f"Deployer address: {wallet.address}")
    print(f"Deployer balance: {format_ether(balance)} ETH")
    if balance < amount:
        fail("Insufficient balance.")

    if not args.yes:
        print(f"Sending {format_ether(amount)} ETH to {to}")
        confirm = input("Are you sure? (y/n): ")
        if confirm.strip().lower() != 'y':
            print("Aborted.")
            return

    # 7. send
    print("⏳ Sending transaction...")
    result = await transfer.send_eth(
        wallet,
        to,
        amount,
        rpc_url,
        wait=not args.no_wait,
        receipt_timeout=args.receipt_timeout,
    )
    if result is None:
        fail("Transaction failed.")

    if result["status"] is None:
        print(f"Transaction sent! Hash: {result['tx_hash']} (no receipt returned)")
        return

    print(f"✅ Transaction sent! Hash: {result['tx_hash']}")
    print(f"Status: {result['status']}")
    if result["status"] != "Success":
        sys.exit(1)


def run() -> None:
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, EOFError):
        print("\nAborted by user.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()

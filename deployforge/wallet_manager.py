# -----------------------------------------------------------------------------
# Project: DeployForge v0.1
# File:    wallet_manager.py
# (c)      2025-2026 Wolfgang Lohmann
# License: MIT
# -----------------------------------------------------------------------------

# wallet_manager.py
'''
Access to the encrypted deployer account.
The keystore is the JSON V3 format written by the deployer generator
(scrypt or pbkdf2 KDF), stored as a single line in the .env file.
'''

import json
import logging
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import is_address, to_checksum_address

logger = logging.getLogger(__name__)


class WalletDecryptError(ValueError):
    """Raised when the keystore cannot be decrypted with the given password."""


def keystore_address(encrypted_json: str) -> Optional[str]:
    """
    Reads the (unauthenticated) address field of a keystore.
    Only used for log output before the password is known.
    """
    try:
        keystore = json.loads(encrypted_json)
    except (TypeError, json.JSONDecodeError):
        return None
    if not isinstance(keystore, dict):
        return None

    address = keystore.get("address")
    if not isinstance(address, str):
        return None
    if not address.startswith("0x"):
        address = "0x" + address
    return to_checksum_address(address) if is_address(address) else None


def decrypt_deployer_wallet(encrypted_json: str, password: str) -> LocalAccount:
    """
    Decrypts the deployer keystore and returns a signing account.

    Args:
        encrypted_json (str): The JSON V3 keystore as stored in the .env.
        password (str): The password entered by the operator.

    Returns:
        LocalAccount: Account with address and signing capability.

    Raises:
        WalletDecryptError: on malformed keystore, unsupported KDF or wrong password.
    """
    try:
        keystore = json.loads(encrypted_json)
    except (TypeError, json.JSONDecodeError) as e:
        logger.error(f"Keystore is not valid JSON: {e}")
        raise WalletDecryptError("Keystore is not valid JSON") from e

    try:
        private_key = Account.decrypt(keystore, password)
    except (ValueError, KeyError, TypeError, NotImplementedError) as e:
        # wrong password surfaces as "MAC mismatch"
        logger.error(f"Failed to decrypt deployer keystore: {e}")
        raise WalletDecryptError("Failed to decrypt wallet") from e

    account = Account.from_key(private_key)
    logger.info(f"Deployer keystore decrypted for {account.address}")
    return account

# -----------------------------------------------------------------------------
# Project: DeployForge v0.1
# File:    utils.py
# (c)      2025-2026 Wolfgang Lohmann
# License: MIT
# -----------------------------------------------------------------------------

# utils.py
# little helpers for the transfer script
# - validation of operator input (address, amount, RPC URL)
# - ETH <-> wei conversion
# - logging setup

import logging
import os
import re
from decimal import Decimal, InvalidOperation
from urllib.parse import urlparse

from eth_utils import is_address, is_checksum_address, to_checksum_address, to_wei

logger = logging.getLogger(__name__)

ETHER_DECIMALS = 18
WEI_PER_ETHER = to_wei(1, "ether")

# digits with an optional fractional part; no sign, no exponent
_AMOUNT_PATTERN = re.compile(r"^(\d+\.?\d*|\.\d+)$")


def is_valid_address(value: str) -> bool:
    """
    True for a 20-byte hex address, with or without 0x prefix.
    Mixed-case input must carry a valid EIP-55 checksum.
    """
    if not isinstance(value, str):
        return False
    value = value.strip()
    body = value[2:] if value.startswith(("0x", "0X")) else value
    if not re.fullmatch(r"[0-9a-fA-F]{40}", body) or not is_address("0x" + body):
        return False
    # is_address only checks hex; the checksum applies to mixed case
    if body not in (body.lower(), body.upper()):
        return is_checksum_address("0x" + body)
    return True


def normalize_address(value: str) -> str:
    """Returns the checksum form of a recipient address or raises ValueError."""
    if not is_valid_address(value):
        raise ValueError("Invalid recipient address")
    body = value.strip()
    if body.startswith(("0x", "0X")):
        body = body[2:]
    return to_checksum_address("0x" + body.lower())


def parse_ether(value: str) -> int:
    """
    Converts a decimal ETH amount (e.g. "0.05") into wei.

    Raises:
        ValueError: for empty, signed, non-numeric or exponent input and
                    for non-zero digits beyond 18 decimal places.
    """
    text = (value or "").strip()
    if not _AMOUNT_PATTERN.match(text):
        raise ValueError("Invalid amount")

    # trailing zeros past wei precision are harmless
    fraction = text.partition(".")[2]
    if fraction[ETHER_DECIMALS:].strip("0"):
        raise ValueError("Invalid amount")

    try:
        return int(to_wei(Decimal(text), "ether"))
    except (InvalidOperation, ValueError) as e:
        raise ValueError("Invalid amount") from e


def format_ether(wei: int) -> str:
    """Formats wei as ETH, e.g. 1500000000000000000 -> '1.5', 10**18 -> '1.0'."""
    sign = "-" if wei < 0 else ""
    whole, frac = divmod(abs(wei), WEI_PER_ETHER)
    frac_str = f"{frac:0{ETHER_DECIMALS}d}".rstrip("0") or "0"
    return f"{sign}{whole}.{frac_str}"


def validate_rpc_url(url: str) -> bool:
    """Basic format check for an RPC URL."""
    if not url:
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def configure_logging(log_file: str, level: int = logging.INFO) -> None:
    """Logs to file and console, creating the log directory if needed."""
    log_dir = os.path.dirname(log_file)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir, exist_ok=True)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file, mode='a', encoding='utf-8'),
            logging.StreamHandler()
        ]
    )

# -----------------------------------------------------------------------------
# Project: DeployForge v0.1
# File:    config.py
# (c)      2025-2026 Wolfgang Lohmann
# License: MIT
# -----------------------------------------------------------------------------

# deployforge/config.py
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when the deployer environment file is missing or incomplete."""


class Config:
    """
    Central Configuration.
    Paths are resolved against the current working directory, because the
    deployer .env lives next to the project that generated the account.
    Secrets are only populated by load_env(), nothing is read at import time.
    """

    # --- PATH SETUP ---
    BASE_DIR = Path.cwd()

    # Path to .env (flexible location)
    ENV_PATH = Path(os.getenv("DEPLOYER_ENV_FILE", str(BASE_DIR / ".env")))

    # Path for outputs (Logs)
    OUTPUT_DIR = BASE_DIR / "output"

    # --- Network ---
    NETWORK_RPC_ENDPOINTS: Dict[str, str] = {
        "sepolia": "https://sepolia.drpc.org",
        "holesky": "https://holesky.drpc.org",
    }

    ACTIVE_NETWORK_NAME = os.getenv("NETWORK", "sepolia").lower()
    DEFAULT_RPC_URL: str = NETWORK_RPC_ENDPOINTS.get(ACTIVE_NETWORK_NAME, NETWORK_RPC_ENDPOINTS["sepolia"])

    # --- Secrets ---
    DEPLOYER_PRIVATE_KEY_ENCRYPTED: Optional[str] = None

    # --- File Paths ---
    LOG_FILE = str(OUTPUT_DIR / f"transfer_{ACTIVE_NETWORK_NAME}.log")

    # --- Control Behavior ---
    TIMEOUT_CONNECT = 10.0
    RECEIPT_TIMEOUT = 120.0
    RECEIPT_POLL_INTERVAL = 2.0

    @classmethod
    def load_env(cls, env_path: Optional[Union[str, Path]] = None) -> Path:
        """
        Reads the deployer .env file and populates network and secret attributes.
        Variables already present in the process environment take precedence
        over the file, same as load_dotenv(override=False).

        Raises:
            ConfigError: if the file does not exist.
        """
        path = Path(env_path) if env_path else cls.ENV_PATH
        if not path.exists():
            raise ConfigError(f".env file not found at {path}. Please generate a deployer account first.")

        values = {k: v for k, v in dotenv_values(path).items() if v is not None}
        values.update(os.environ)

        cls.ENV_PATH = path
        cls.ACTIVE_NETWORK_NAME = values.get("NETWORK", "sepolia").lower()
        cls.DEFAULT_RPC_URL = values.get("RPC_URL") or cls.NETWORK_RPC_ENDPOINTS.get(
            cls.ACTIVE_NETWORK_NAME, cls.NETWORK_RPC_ENDPOINTS["sepolia"]
        )
        if cls.ACTIVE_NETWORK_NAME not in cls.NETWORK_RPC_ENDPOINTS and not values.get("RPC_URL"):
            logger.warning(
                f"No default RPC endpoint for NETWORK '{cls.ACTIVE_NETWORK_NAME}', falling back to {cls.DEFAULT_RPC_URL}"
            )
        cls.DEPLOYER_PRIVATE_KEY_ENCRYPTED = values.get("DEPLOYER_PRIVATE_KEY_ENCRYPTED") or None
        cls.LOG_FILE = str(cls.OUTPUT_DIR / f"transfer_{cls.ACTIVE_NETWORK_NAME}.log")
        return path

    @classmethod
    def validate_deployer_config(cls) -> None:
        """Checks that everything needed for a transfer was found in the .env."""
        if not cls.DEPLOYER_PRIVATE_KEY_ENCRYPTED:
            raise ConfigError(
                "DEPLOYER_PRIVATE_KEY_ENCRYPTED not found in .env. Please generate a deployer account first."
            )

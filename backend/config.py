# Role: Central configuration module. Loads .env into environment variables and computes runtime values
# (DEBUG, public host, demo wallet, API keys). Importers read backend.config.X at call time, so tests can patch them.

from __future__ import annotations

import os
from dotenv import load_dotenv

DEBUG: bool = False

# Key line: every absolute URL in a frame (images + post target) is built from this host.
HOST: str = "http://localhost:8000"

# Wallet connection is simulated; this address is "connected" on the connect-wallet step.
_DEFAULT_DEMO_WALLET = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"  # vitalik.eth
DEMO_WALLET_ADDRESS: str = _DEFAULT_DEMO_WALLET

ZAPPER_API_KEY: str | None = None


def load_env() -> None:
    """
    Load .env into os.environ, then recompute the module-level values.
    This keeps them correct even if load_env() is called after import.
    """
    global DEBUG, HOST, DEMO_WALLET_ADDRESS, ZAPPER_API_KEY
    load_dotenv()
    # Key line: accept common truthy values.
    DEBUG = os.getenv("DEBUG", "0").lower() in {"1", "true", "yes"}

    host = os.getenv("FRAME_HOST") or os.getenv("BASE_URL") or "http://localhost:8000"
    HOST = host.rstrip("/")

    DEMO_WALLET_ADDRESS = os.getenv("DEMO_WALLET") or _DEFAULT_DEMO_WALLET
    ZAPPER_API_KEY = os.getenv("ZAPPER_API_KEY") or None

"""
Configuration module for the BlockSeal host service.

Centralizes all configuration with environment variable support
and validation.
"""

import os
from typing import Dict

# ============================================================
# Environment Configuration
# ============================================================

ENV = os.getenv("BLOCKSEAL_ENV", "dev")  # dev|stage|prod

DEV_SECRET_KEY = "some-super-seekrit-key"

# Server
HOST = os.getenv("BLOCKSEAL_HOST", "127.0.0.1")
PORT = int(os.getenv("BLOCKSEAL_PORT", "3001"))

# Signing configuration
SECRET_KEY = os.getenv("BLOCKSEAL_SECRET_KEY", DEV_SECRET_KEY)

# Scan behaviour
SCAN_WORKERS = int(os.getenv("BLOCKSEAL_SCAN_WORKERS", "1"))
STRICT_SCAN = os.getenv("BLOCKSEAL_STRICT_SCAN", "true").lower() in ("1", "true", "yes")

# Logging
LOG_LEVEL = os.getenv("BLOCKSEAL_LOG_LEVEL", "INFO")
LOG_JSON = os.getenv("BLOCKSEAL_LOG_JSON", "true").lower() in ("1", "true", "yes")
LOG_FILE = os.getenv("BLOCKSEAL_LOG_FILE") or None


# ============================================================
# Validation
# ============================================================

def validate_config() -> Dict[str, bool]:
    """
    Validate configuration values.
    Returns dict of check -> passed.
    """
    return {
        "secret_key_set": bool(SECRET_KEY),
        "secret_key_not_default": not (is_production() and SECRET_KEY == DEV_SECRET_KEY),
        "scan_workers_positive": SCAN_WORKERS >= 1,
    }


# ============================================================
# Feature Flags
# ============================================================

def is_production() -> bool:
    """Check if running in production mode."""
    return ENV == "prod"


def is_debug() -> bool:
    """Check if debug mode is enabled."""
    return os.getenv("BLOCKSEAL_DEBUG", "").lower() in ("1", "true", "yes")

"""Environment variable utilities."""

import logging
import os

logger = logging.getLogger(__name__)


def get_env_str(name: str, default: str) -> str:
    """Get string environment variable.

    Args:
        name: Environment variable name
        default: Default value if not found or blank

    Returns:
        Stripped value from environment or default
    """
    raw = os.getenv(name)
    if raw is None:
        return default

    s = raw.strip()
    if s == "":
        logger.debug(f"Empty value for {name}. Using default: {default}")
        return default
    return s

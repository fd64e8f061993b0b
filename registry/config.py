"""Configuration settings for the Registry server."""

import os
from typing import Dict, Optional

from common.constants import REGISTRY_PORT as DEFAULT_REGISTRY_PORT


REGISTRY_HOST = os.environ.get("REGISTRY_HOST", "0.0.0.0")

REGISTRY_PORT = int(os.environ.get("REGISTRY_PORT", str(DEFAULT_REGISTRY_PORT)))

# Unset means the registry lives in memory only.
DATABASE_PATH: Optional[str] = os.environ.get("REGISTRY_DATABASE_PATH") or None

IDENTITY_TOKENS = os.environ.get("REGISTRY_IDENTITY_TOKENS", "")


def parse_identity_tokens(raw: str) -> Dict[str, str]:
    """
    Parse a 'token=identity,token=identity' string into a lookup table.

    Args:
        raw: Comma-separated token=identity pairs

    Returns:
        Mapping of credential token to identity; entries without '=' are skipped
    """
    table = {}
    for pair in raw.split(','):
        token, sep, identity = pair.strip().partition('=')
        if sep and token.strip() and identity.strip():
            table[token.strip()] = identity.strip()
    return table

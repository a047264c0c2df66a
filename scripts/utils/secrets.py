import os

from config.BluePrint import NETWORKS
from scripts.utils import log


def read_secret(path):
    """
    Best-effort read of a one-line secret file.
    Returns the stripped content, or None when the file is missing, unreadable or empty.
    """
    try:
        with open(path) as file:
            secret = file.read().strip()
    except (OSError, UnicodeDecodeError):
        log.warning(f"No available {os.path.basename(path)}")
        return None

    if not secret:
        log.warning(f"Empty {os.path.basename(path)}")
        return None
    return secret


def network_accounts(network, root="."):
    # private keys for a remote network, [] when no secret is configured
    config = NETWORKS.get(network, {})
    secret_file = config.get("secret_file")
    if not secret_file:
        return []

    key = read_secret(os.path.join(root, secret_file))
    return [key] if key else []

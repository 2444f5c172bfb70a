# bonalba/client/token_store.py
import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# A single access token per user profile, e.g. ~/.bonalba/session.json
CONFIG_DIR = Path(os.getenv("BONALBA_CONFIG_DIR", Path.home() / ".bonalba"))
CONFIG_FILE = CONFIG_DIR / "session.json"


def _ensure_config_dir_exists():
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)


def save_token(token: str):
    """Store the access token, replacing any previous one."""
    _ensure_config_dir_exists()
    with open(CONFIG_FILE, "w", encoding="utf-8") as f:
        json.dump({"access_token": token}, f, indent=4)
    logger.debug(f"Access token saved to {CONFIG_FILE}")


def get_token() -> Optional[str]:
    """
    Read the stored access token.
    Returns None when there is no session file or it cannot be parsed.
    """
    if not CONFIG_FILE.exists():
        return None
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            return json.load(f).get("access_token")
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read session file {CONFIG_FILE}: {e}")
        return None


def clear_token():
    try:
        if CONFIG_FILE.exists():
            os.remove(CONFIG_FILE)
            logger.debug("Session file removed")
    except OSError as e:
        logger.error(f"Could not remove session file {CONFIG_FILE}: {e}")

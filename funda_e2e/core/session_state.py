"""
Browser storage-state persistence.

A snapshot is what Playwright's BrowserContext.storage_state() returns:
{"cookies": [...], "origins": [...]}. It is written after an interactive
login and replayed on later runs to skip the login form.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union
import json
import logging

from playwright.sync_api import BrowserContext

logger = logging.getLogger(__name__)


def load_state(file_path: Union[str, Path]) -> Optional[Dict]:
    """Load a storage-state snapshot, or None if missing or unreadable"""
    path = Path(file_path)

    if not path.exists():
        logger.debug(f"[Session State] No state file at {path}")
        return None

    try:
        with open(path, 'r', encoding='utf-8') as f:
            state = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"[Session State] Failed to read {path}: {e}")
        return None

    return state if isinstance(state, dict) else None


def get_cookies(state: Optional[Dict]) -> List[Dict]:
    """Cookies of a snapshot; empty list when absent or malformed"""
    if not state:
        return []
    cookies = state.get('cookies')
    return cookies if isinstance(cookies, list) else []


def is_state_valid(state: Optional[Dict]) -> bool:
    """
    A snapshot counts as valid if it holds at least one cookie.

    Cookie expiry is not checked here; stale cookies only show up after
    navigating with them and re-checking the login indicators.
    """
    return len(get_cookies(state)) > 0


def is_state_file_valid(file_path: Union[str, Path]) -> bool:
    return is_state_valid(load_state(file_path))


def apply_state_cookies(context: BrowserContext, state: Dict) -> int:
    """Add the snapshot's cookies to a live context; returns how many"""
    cookies = get_cookies(state)
    if cookies:
        context.add_cookies(cookies)
        logger.info(f"[Session State] Applied {len(cookies)} stored cookies")
    return len(cookies)


def save_browser_state(context: BrowserContext, file_path: Union[str, Path]) -> bool:
    """Write the context's storage state to disk; returns False on failure"""
    path = Path(file_path)

    try:
        state = context.storage_state()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(state, f, indent=2)
        logger.info(f"[Session State] Browser state saved to {path}")
        return True
    except Exception as e:
        logger.error(f"[Session State] Failed to save browser state: {e}")
        return False

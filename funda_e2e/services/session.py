from typing import Optional
import logging

from playwright.sync_api import Page

from funda_e2e.core.config import Settings, settings as default_settings
from funda_e2e.core.run_mode import RunMode
from funda_e2e.core.session_state import apply_state_cookies, is_state_valid, load_state
from funda_e2e.core.test_data import get_credentials
from funda_e2e.pages.base_page import BasePage
from funda_e2e.services.commands import login

logger = logging.getLogger(__name__)


def login_with_stored_state(page: Page, base_page: BasePage, settings: Settings) -> bool:
    """Replay stored cookies and check whether they still authenticate us"""
    state_path = settings.get_state_path()
    state = load_state(state_path)

    if not is_state_valid(state):
        logger.info(f"[Session] No valid state file at {state_path}")
        return False

    logger.info("[Session] Found valid state file, applying stored cookies")
    apply_state_cookies(page.context, state)
    page.goto(settings.main_base_url)

    if base_page.is_logged_in():
        logger.info("[Session] ✅ Logged in using stored cookies")
        return True

    logger.info("[Session] Stored cookies did not give a logged-in session")
    return False


def ensure_logged_in(page: Page, settings: Optional[Settings] = None,
                     run_mode: Optional[RunMode] = None,
                     user_type: str = 'testUser') -> bool:
    """
    Make sure the page's session is authenticated.

    Tries, in order: the current session, the stored cookie snapshot, the
    login form with credentials from the credentials file. Returns False
    instead of raising so callers can skip dependent scenarios.
    """
    settings = settings or default_settings
    run_mode = run_mode or settings.get_run_mode()

    logger.info("[Session] Ensuring user is logged in before proceeding...")
    base_page = BasePage(page, run_mode=run_mode, settings=settings)

    if base_page.is_logged_in():
        logger.info("[Session] User is already logged in")
        return True

    try:
        if login_with_stored_state(page, base_page, settings):
            return True
    except Exception as e:
        logger.warning(f"[Session] Could not use stored state: {e}")

    try:
        credentials = get_credentials(user_type, settings.get_credentials_path())
        if login(page, credentials, run_mode=run_mode, settings=settings):
            logger.info("[Session] ✅ Logged in with credentials")
            return True
        logger.error("[Session] ❌ Failed to log in with credentials")
        return False
    except Exception as e:
        logger.error(f"[Session] ❌ Error during login: {e}")
        return False

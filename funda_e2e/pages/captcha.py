from typing import Callable, Dict, Optional
from urllib.parse import urlparse
import logging

from playwright.sync_api import Page

from funda_e2e.core.config import Settings, settings as default_settings
from funda_e2e.core.exceptions import CaptchaInHeadlessModeError, CaptchaTimeoutError
from funda_e2e.core.run_mode import RunMode

logger = logging.getLogger(__name__)

# Challenge kinds
CHECKBOX = "checkbox"
IMAGE_SELECT = "image_select"

# Challenge states
NOT_PRESENT = "NOT_PRESENT"
AWAITING_RESOLUTION = "AWAITING_RESOLUTION"
CLEARED = "CLEARED"
TIMED_OUT = "TIMED_OUT"
FAILED = "FAILED"


class CaptchaHandler:
    """
    Detect funda's human-verification interstitials and wait them out.

    Two challenge kinds are recognised: the checkbox gate ("Je bent bijna op
    de pagina die je zoekt") and the image-selection gate. In a
    non-interactive run a detected challenge fails immediately, since nothing
    can solve it. In an interactive run the page is polled at a fixed
    interval until the challenge clears or the ceiling is reached.

    Per challenge the handler moves NOT_PRESENT -> AWAITING_RESOLUTION ->
    CLEARED, or ends in TIMED_OUT (FAILED when nobody can solve it).
    """

    ACCESS_DENIED = 'text=Access to login.funda.nl was denied'
    CHECKBOX_GATE = 'text=Je bent bijna op de pagina die je zoekt'
    LOGIN_FORM = 'button:has-text("Log in"), input[placeholder="E-mailadres"]'
    IMAGE_GATE = '.rc-imageselect-challenge, [class*="imageselect"]'

    SETTLE_MS = 2000
    RESYNC_SETTLE_MS = 1000

    def __init__(self, page: Page, run_mode: RunMode,
                 navigate: Optional[Callable[[str, bool], None]] = None,
                 check_interval_ms: Optional[int] = None,
                 timeout_ms: Optional[int] = None,
                 settings: Optional[Settings] = None):
        self.page = page
        self.run_mode = run_mode
        self.navigate = navigate
        self.settings = settings or default_settings
        self.check_interval_ms = check_interval_ms or self.settings.captcha_check_interval_ms
        self.timeout_ms = timeout_ms or self.settings.captcha_timeout_ms

        self.main_host = urlparse(self.settings.main_base_url).netloc

        self.state = NOT_PRESENT
        self.kind: Optional[str] = None
        self.elapsed_ms = 0

    def _is_visible(self, selector: str, timeout: Optional[int] = None) -> bool:
        try:
            if timeout is None:
                return bool(self.page.locator(selector).is_visible())
            return bool(self.page.locator(selector).is_visible(timeout=timeout))
        except Exception as e:
            logger.debug(f"[Captcha] Visibility check failed for {selector}: {e}")
            return False

    def is_present(self, kind: str, timeout: Optional[int] = None) -> bool:
        if kind == CHECKBOX:
            return self._is_visible(self.CHECKBOX_GATE, timeout=timeout)
        return self._is_visible(self.IMAGE_GATE, timeout=timeout)

    def is_cleared(self, kind: str) -> bool:
        if kind == CHECKBOX:
            return not self._is_visible(self.CHECKBOX_GATE) or self._is_visible(self.LOGIN_FORM)
        return not self._is_visible(self.IMAGE_GATE)

    def handle(self, return_path: str = 'account/login', use_main_site: bool = False):
        """
        Deal with any challenge on the current page, then make sure we end up
        on return_path.

        Raises:
            CaptchaInHeadlessModeError: challenge found in a non-interactive run
            CaptchaTimeoutError: challenge not solved before the ceiling
        """
        logger.info("[Captcha] Checking for access denied or CAPTCHA...")

        if self._is_visible(self.ACCESS_DENIED, timeout=3000):
            logger.warning("[Captcha] Access denied page detected. Refreshing the page...")
            self.page.reload()
            self.page.wait_for_timeout(self.SETTLE_MS)

        if self.is_present(CHECKBOX, timeout=3000):
            self.wait_for_resolution(CHECKBOX)

        if self.is_present(IMAGE_SELECT, timeout=2000):
            self.wait_for_resolution(IMAGE_SELECT)

        self.resync(return_path, use_main_site)

    def wait_for_resolution(self, kind: str):
        """Poll until the challenge clears; the caller already saw it present"""
        self.kind = kind
        self.state = AWAITING_RESOLUTION
        self.elapsed_ms = 0
        logger.warning(f"[Captcha] 🚨 {kind} challenge detected!")

        if not self.run_mode.is_interactive:
            self.state = FAILED
            raise CaptchaInHeadlessModeError(
                f"CAPTCHA ({kind}) detected in non-interactive mode. Test cannot proceed automatically."
            )

        logger.warning(
            f"[Captcha] ⚠️ MANUAL ACTION NEEDED: solve the challenge in the browser window "
            f"within {self.timeout_ms / 1000:.0f}s"
        )

        check_count = 0
        while self.elapsed_ms < self.timeout_ms:
            if self.is_cleared(kind):
                logger.info(f"[Captcha] ✅ {kind} challenge passed after {self.elapsed_ms / 1000:.0f}s")
                self.state = CLEARED
                self.page.wait_for_timeout(self.SETTLE_MS)
                return

            # Last wait is cut short so the ceiling is never passed
            wait_ms = min(self.check_interval_ms, self.timeout_ms - self.elapsed_ms)
            self.page.wait_for_timeout(wait_ms)
            self.elapsed_ms += wait_ms
            check_count += 1

            if check_count % 5 == 0:
                logger.info(
                    f"[Captcha] ⏳ Still waiting for CAPTCHA completion... "
                    f"({self.elapsed_ms / 1000:.0f}/{self.timeout_ms / 1000:.0f}s)"
                )

        self.state = TIMED_OUT
        error_msg = f"CAPTCHA solving timeout exceeded after {self.elapsed_ms / 1000:.0f}s ({kind})"
        logger.error(f"[Captcha] ❌ {error_msg}")
        raise CaptchaTimeoutError(error_msg)

    def resync(self, return_path: str, use_main_site: bool = False) -> bool:
        """Navigate back to return_path if the challenge left us elsewhere"""
        current_url = self.page.url or ""
        on_main_site = self.main_host in current_url
        auth_site_path = 'account/' in return_path

        wrong_side = (
            (on_main_site and auth_site_path and not use_main_site)
            or (not on_main_site and not auth_site_path and use_main_site)
        )

        if not wrong_side and return_path in current_url:
            return False

        if self.navigate is None:
            logger.warning(f"[Captcha] Not on {return_path} and no way to navigate back")
            return False

        logger.info(f"[Captcha] Not on {return_path} after CAPTCHA handling, navigating there")
        self.navigate(return_path, use_main_site)
        self.page.wait_for_timeout(self.RESYNC_SETTLE_MS)
        return True

    def get_status(self) -> Dict:
        """Get current status as dictionary"""
        return {
            "state": self.state,
            "kind": self.kind,
            "elapsed_seconds": self.elapsed_ms / 1000,
            "run_mode": self.run_mode.value,
        }

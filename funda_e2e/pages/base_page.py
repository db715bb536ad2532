from typing import Optional
from urllib.parse import urlparse
from datetime import datetime
import logging
import os

from playwright.sync_api import Locator, Page

from funda_e2e.core.config import Settings, settings as default_settings
from funda_e2e.core.run_mode import RunMode
from funda_e2e.pages.captcha import CaptchaHandler

logger = logging.getLogger(__name__)


class BasePage:
    """Common functionality for all funda page objects"""

    page_name = "Base Page"

    # Paths that only exist on the main site
    MAIN_SITE_PREFIXES = ('zoeken', 'koop', 'huur', 'mijn')

    cookie_banner = {
        'accept_button': '[aria-label="Alles accepteren"]',
        'reject_button': '[aria-label="Alles weigeren"]',
    }

    logged_in_indicators = [
        'text=Account',
    ]
    account_menu = 'button:has-text("Account")'
    logout_link = 'a:has-text(" Uitloggen")'
    logged_out_indicators = [
        'input[id="UserName"]',
        'input[id="Password"]',
        'button:has-text("Log in")',
    ]

    def __init__(self, page: Page, domain: Optional[str] = None,
                 run_mode: RunMode = RunMode.NON_INTERACTIVE,
                 settings: Optional[Settings] = None):
        self.page = page
        self.run_mode = run_mode
        self.settings = settings or default_settings

        self.domains = {
            'auth': self.settings.auth_base_url,
            'main': self.settings.main_base_url,
        }
        self.base_url = domain or self.domains['auth']

        self.captcha = CaptchaHandler(page, run_mode, navigate=self.navigate, settings=self.settings)

    @property
    def main_host(self) -> str:
        return urlparse(self.domains['main']).netloc

    @property
    def auth_host(self) -> str:
        return urlparse(self.domains['auth']).netloc

    def build_url(self, path: str = '', use_main_site: bool = False) -> str:
        domain = self.domains['main'] if use_main_site else self.base_url
        if path.startswith(self.MAIN_SITE_PREFIXES):
            domain = self.domains['main']
        return f"{domain}/{path}"

    def navigate(self, path: str = '', use_main_site: bool = False):
        """Navigate to a path on the auth domain, or the main domain when required"""
        url = self.build_url(path, use_main_site)
        logger.info(f"[{self.page_name}] Navigating to: {url}")
        self.page.goto(url)

    def is_on_main_site(self) -> bool:
        return self.main_host in (self.page.url or "")

    def wait_for_page_load(self):
        self.page.wait_for_load_state('networkidle')

    def is_visible(self, selector: str, timeout: Optional[int] = None) -> bool:
        """Visibility as a soft signal: lookup errors count as not visible"""
        try:
            locator = self.page.locator(selector)
            if timeout is None:
                return bool(locator.is_visible())
            return bool(locator.is_visible(timeout=timeout))
        except Exception as e:
            logger.debug(f"[{self.page_name}] Could not check visibility of {selector}: {e}")
            return False

    def accept_cookies_if_visible(self) -> bool:
        """Accept the cookie banner if it shows up within a few seconds"""
        try:
            accept_button = self.page.locator(self.cookie_banner['accept_button'])
            accept_button.wait_for(timeout=5000)

            if accept_button.is_visible():
                accept_button.click()
                self.page.wait_for_timeout(1000)
                logger.debug(f"[{self.page_name}] Cookie banner accepted")
                return True
        except Exception:
            logger.info(f"[{self.page_name}] Cookie banner not detected or already accepted")
        return False

    def is_logged_in(self) -> bool:
        """
        Best-effort check whether the current session is authenticated.

        Checks in order: the URL is on the main site (login redirects there),
        an "Account" indicator is visible, the account menu holds a logout
        link. Visible login-form fields count as logged out. Never raises.
        """
        try:
            logger.info(f"[{self.page_name}] Checking if user is logged in, url: {self.page.url}")

            self.page.wait_for_timeout(1000)
            url = self.page.url or ""

            if self.is_on_main_site() or (self.auth_host not in url and 'funda.nl' in url):
                logger.info(f"[{self.page_name}] User is logged in - on main funda site")
                return True

            for indicator in self.logged_in_indicators:
                if self.is_visible(indicator, timeout=1000):
                    logger.info(f"[{self.page_name}] User is logged in - found indicator: {indicator}")
                    return True

            try:
                if self.is_visible(self.account_menu, timeout=1000) and self.safe_click(self.account_menu):
                    self.page.wait_for_timeout(500)

                    if self.is_visible(self.logout_link, timeout=1000):
                        logger.info(f"[{self.page_name}] User is logged in - found logout link in account menu")
                        return True
            except Exception as e:
                logger.info(f"[{self.page_name}] Error checking account menu: {e}")

            for indicator in self.logged_out_indicators:
                if self.is_visible(indicator, timeout=1000):
                    logger.info(f"[{self.page_name}] User is NOT logged in - found login element: {indicator}")
                    return False

            logger.info(f"[{self.page_name}] No definitive login indicators found, assuming not logged in")
            return False

        except Exception as e:
            logger.error(f"[{self.page_name}] Error checking login state: {e}")
            return False

    def wait_for_element(self, selector: str, **options) -> Locator:
        """Wait for an element to be visible and return its locator"""
        element = self.page.locator(selector)
        element.wait_for(state='visible', **options)
        return element

    def handle_possible_captcha(self, return_path: str = 'account/login', use_main_site: bool = False):
        self.captcha.handle(return_path=return_path, use_main_site=use_main_site)

    def safe_click(self, selector: str, timeout: int = 5000) -> bool:
        """Safely click element with error handling"""
        try:
            self.page.locator(selector).first.click(timeout=timeout)
            return True
        except Exception as e:
            logger.debug(f"[{self.page_name}] Could not click {selector}: {e}")
            return False

    def safe_fill(self, selector: str, value: str, timeout: int = 5000) -> bool:
        """Safely fill input with error handling"""
        try:
            self.page.locator(selector).fill(value, timeout=timeout)
            return True
        except Exception as e:
            logger.debug(f"[{self.page_name}] Could not fill {selector}: {e}")
            return False

    def safe_get_text(self, selector: str, timeout: int = 5000) -> Optional[str]:
        """Safely get text content"""
        try:
            text = self.page.locator(selector).first.text_content(timeout=timeout)
            return text.strip() if text else text
        except Exception as e:
            logger.debug(f"[{self.page_name}] Could not get text from {selector}: {e}")
        return None

    def debug_save_page(self, prefix: str = "debug", debug_dir: str = "debug_output"):
        """Save page screenshot and HTML for debugging"""
        try:
            os.makedirs(debug_dir, exist_ok=True)

            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            base_name = f"{prefix}_{self.page_name.lower().replace(' ', '_')}_{timestamp}"

            screenshot_path = os.path.join(debug_dir, f"{base_name}.png")
            self.page.screenshot(path=screenshot_path, full_page=True)
            logger.info(f"[{self.page_name}] Saved debug screenshot: {screenshot_path}")

            html_path = os.path.join(debug_dir, f"{base_name}.html")
            with open(html_path, 'w', encoding='utf-8') as f:
                f.write(self.page.content())
            logger.info(f"[{self.page_name}] Saved debug HTML: {html_path}")

        except Exception as e:
            logger.warning(f"[{self.page_name}] Failed to save debug output: {e}")

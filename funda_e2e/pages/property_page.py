from typing import Optional
import logging

from playwright.sync_api import Page

from funda_e2e.core.config import Settings
from funda_e2e.core.run_mode import RunMode
from funda_e2e.pages.base_page import BasePage
from funda_e2e.utils.strategies import Strategy, try_strategies

logger = logging.getLogger(__name__)


class PropertyPage(BasePage):
    """A single listing's detail page"""

    page_name = "Property Page"

    brochure_link_selectors = [
        'a:has-text(" Download brochure ")',
        'text= Download brochure ',
    ]

    def __init__(self, page: Page, run_mode: RunMode = RunMode.NON_INTERACTIVE,
                 settings: Optional[Settings] = None):
        super().__init__(page, run_mode=run_mode, settings=settings)
        self.base_url = self.domains['main']

    def open(self, url: str):
        logger.info(f"[{self.page_name}] Opening property: {url}")
        self.page.goto(url)
        self.wait_for_page_load()

    def open_brochure(self) -> Optional[Page]:
        """
        Click the "Download brochure" link and return the tab it opens.

        Returns None when no brochure link could be clicked.
        """
        outcome = try_strategies(
            [Strategy(selector, lambda s=selector: self.is_visible(s, timeout=2000))
             for selector in self.brochure_link_selectors],
            label="find brochure link",
        )
        if not outcome.succeeded:
            logger.warning(f"[{self.page_name}] No download brochure link found")
            return None

        logger.info(f"[{self.page_name}] Found download link with selector: {outcome.strategy}")
        with self.page.context.expect_page() as new_page_info:
            self.page.locator(outcome.strategy).first.click()

        brochure_page = new_page_info.value
        brochure_page.wait_for_load_state('networkidle')
        logger.info(f"[{self.page_name}] Brochure opened in new tab: {brochure_page.url}")
        return brochure_page

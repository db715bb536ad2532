from typing import Dict, Optional
import logging

from playwright.sync_api import Page

from funda_e2e.core.config import Settings
from funda_e2e.core.run_mode import RunMode
from funda_e2e.pages.base_page import BasePage
from funda_e2e.pages.filter_panel import fill_filter_panel

logger = logging.getLogger(__name__)


class HomePage(BasePage):
    """funda.nl landing page: location search, filters, map entry point"""

    page_name = "Home Page"

    search_box = {
        'input': 'input[data-test-id="input-search-query"]',
        'location_input': 'input[data-testid="search-box"]',
        'location_suggestions': 'li[data-testid="SearchBox-location-suggestion"]',
        'map_view_button': 'a[data-interaction-id="map-search"]',
    }

    def __init__(self, page: Page, domain: Optional[str] = None,
                 run_mode: RunMode = RunMode.NON_INTERACTIVE,
                 settings: Optional[Settings] = None):
        super().__init__(page, domain=domain, run_mode=run_mode, settings=settings)
        if domain is None:
            self.base_url = self.domains['main']

    def navigate_to_home(self):
        self.navigate()

    def search(self, location: str):
        """Type a location, pick the first suggestion and wait for the results"""
        if 'funda.nl' not in (self.page.url or ""):
            self.navigate_to_home()

        location_input = self.page.locator(self.search_box['location_input'])
        location_input.click()
        location_input.fill(location)

        self.page.wait_for_selector(self.search_box['location_suggestions'])
        self.page.locator(self.search_box['location_suggestions']).first.click()
        logger.info(f"[{self.page_name}] Searching for location: {location}")

        self.wait_for_page_load()

    def navigate_to_map_search(self):
        self.page.locator(self.search_box['map_view_button']).click()
        self.wait_for_page_load()

    def apply_filters(self, filter_data: Dict):
        fill_filter_panel(self.page, filter_data)
        self.wait_for_page_load()

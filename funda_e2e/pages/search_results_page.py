from typing import Dict, Optional
import logging
import re

from playwright.sync_api import Page

from funda_e2e.core.exceptions import PageObjectError
from funda_e2e.core.config import Settings
from funda_e2e.core.run_mode import RunMode
from funda_e2e.pages.base_page import BasePage

logger = logging.getLogger(__name__)

# Outcomes of a view switch
VIEW_SWITCHED = "switched"
VIEW_ASSUMED_CURRENT = "assumed_current"

COUNT_PATTERN = re.compile(r'(\d{1,3}(?:[.,]\d{3})+|\d+)')


def parse_result_count(text: Optional[str]) -> Optional[int]:
    """
    Pull the result count out of a results header.

    Examples:
        >>> parse_result_count("1,234 resultaten")
        1234
        >>> parse_result_count("12.345 koopwoningen in Nederland")
        12345
        >>> parse_result_count("Geen resultaten")
        None
    """
    if not text:
        return None
    match = COUNT_PATTERN.search(text)
    if not match:
        return None
    return int(re.sub(r'[.,]', '', match.group(1)))


def extract_listing_id(href: Optional[str]) -> str:
    """
    Listing ID from a result link.

    "/koop/amsterdam/huis-12345678/" -> "12345678"
    "/detail/koop/amsterdam/appartement-x-1/43921073/" -> "43921073"
    """
    if not href:
        return ''
    match = re.search(r'/([^/]+)/?$', href.split('?')[0])
    if not match:
        return ''
    segment = match.group(1)
    if segment.isdigit():
        return segment
    if '-' in segment:
        return segment.split('-')[-1]
    return ''


class SearchResultsPage(BasePage):
    """Search results list with list/card view toggle"""

    page_name = "Search Results Page"

    search_results = {
        'result_items': 'ul[data-test-id="search-results"] > li',
        'result_item_title': '[data-test-id="street-name-house-number"]',
        'result_item_price': '[data-test-id="price"]',
        'result_item_location': '[data-test-id="property-address"]',
        'result_count': 'h1[data-testid="pageHeader"]',
        'list_view_button': 'div:has-text(" Lijst")',
        'card_view_button': 'div:has-text(" Kaart")',
        'no_results_message': 'div[data-test-id="no-results"]',
    }

    def __init__(self, page: Page, domain: Optional[str] = None,
                 run_mode: RunMode = RunMode.NON_INTERACTIVE,
                 settings: Optional[Settings] = None):
        super().__init__(page, domain=domain, run_mode=run_mode, settings=settings)
        if domain is None:
            self.base_url = self.domains['main']

    def wait_for_search_results(self) -> bool:
        """Wait for result items or the no-results message"""
        either = f"{self.search_results['result_items']}, {self.search_results['no_results_message']}"
        try:
            self.page.wait_for_selector(either, timeout=10000)
            self.page.wait_for_timeout(500)
            return True
        except Exception as e:
            logger.error(f"[{self.page_name}] Failed to wait for search results: {e}")
            return False

    def get_result_count(self) -> int:
        try:
            if self.is_visible(self.search_results['no_results_message']):
                return 0

            count_text = self.safe_get_text(self.search_results['result_count'])
            count = parse_result_count(count_text)
            if count is not None:
                return count

            return self.page.locator(self.search_results['result_items']).count()
        except Exception as e:
            logger.error(f"[{self.page_name}] Failed to get result count: {e}")
            return 0

    def _switch_view(self, button_key: str, view_name: str) -> str:
        # TODO: verify the active view from the page instead of button visibility
        if not self.is_visible(self.search_results[button_key]):
            logger.info(f"[{self.page_name}] {view_name} button not visible, assuming {view_name} is active")
            return VIEW_ASSUMED_CURRENT

        self.page.locator(self.search_results[button_key]).first.click()
        self.wait_for_search_results()
        logger.info(f"[{self.page_name}] Switched to {view_name}")
        return VIEW_SWITCHED

    def switch_to_list_view(self) -> str:
        return self._switch_view('list_view_button', 'list view')

    def switch_to_card_view(self) -> str:
        return self._switch_view('card_view_button', 'card view')

    def get_result_details(self, index: int = 0) -> Dict:
        result_items = self.page.locator(self.search_results['result_items'])
        count = result_items.count()

        if count == 0:
            raise PageObjectError("No search results found")
        if index >= count:
            raise PageObjectError(f"Result index {index} is out of range (0-{count - 1})")

        item = result_items.nth(index)

        title = item.locator(self.search_results['result_item_title']).first.text_content()
        price = item.locator(self.search_results['result_item_price']).first.text_content()
        location = item.locator(self.search_results['result_item_location']).first.text_content()
        href = item.locator('a').first.get_attribute('href')

        return {
            'title': (title or '').strip(),
            'price': (price or '').strip(),
            'location': (location or '').strip(),
            'listing_id': extract_listing_id(href),
            'element': item,
        }

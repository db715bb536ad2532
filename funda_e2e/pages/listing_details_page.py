from typing import Dict, Optional, Union
import logging

from playwright.sync_api import Page

from funda_e2e.core.config import Settings
from funda_e2e.core.run_mode import RunMode
from funda_e2e.pages.base_page import BasePage

logger = logging.getLogger(__name__)

SCROLL_TO_XPATH_SCRIPT = """
(xpath) => {
    const element = document.evaluate(
        xpath, document, null, XPathResult.FIRST_ORDERED_NODE_TYPE, null
    ).singleNodeValue;
    if (element) {
        element.scrollIntoView({ behavior: 'smooth', block: 'center' });
        return true;
    }
    return false;
}
"""

# Keyword -> exterior-space checkbox in the filter sidebar
KEYWORD_CHECKBOXES = {
    'tuin': {
        'checkbox': '#checkbox-garden',
        'label': '//label[contains(text(), "Tuin")]',
    },
    'balkon': {
        'checkbox': '#checkbox-balcony',
        'label': '//label[contains(text(), "Balkon")]',
    },
    'garage': {
        'checkbox': '#checkbox-lock_up',
        'label': '//label[contains(text(), "Garagebox")]',
    },
}


def get_keyword_checkbox(keyword: str) -> Dict[str, str]:
    """Selectors for a keyword filter; ValueError for unsupported keywords"""
    selectors = KEYWORD_CHECKBOXES.get(keyword.lower())
    if not selectors:
        supported = ', '.join(KEYWORD_CHECKBOXES)
        raise ValueError(f"Unsupported keyword filter: {keyword}. Supported keywords are: {supported}")
    return selectors


class ListingDetailsPage(BasePage):
    """Buy listings overview (www.funda.nl/koop) with the range filter sidebar"""

    page_name = "Listing Details Page"

    LIST_VIEW_URL_PATH = 'koop/'

    selectors = {
        'price_min_input': '[data-testid="FilterRangepriceMin"] input',
        'price_max_input': '[data-testid="FilterRangepriceMax"] input',
        'living_area_min_input': '[data-testid="FilterRangefloor_areaMin"] input',
        'living_area_max_input': '[data-testid="FilterRangefloor_areaMax"] input',
        'filter_button': 'button:has-text("Filters")',

        'search_results': '//h1[@data-testid="pageHeader"]//div[contains(text(),"in Nederland")]',
        'listings_container': 'div.flex.flex-col.gap-3.mt-4',
        'listing_cards': 'div.flex.flex-col.gap-3.mt-4 > div > div.border-b.pb-3',
    }

    def __init__(self, page: Page, run_mode: RunMode = RunMode.NON_INTERACTIVE,
                 settings: Optional[Settings] = None):
        super().__init__(page, run_mode=run_mode, settings=settings)
        self.base_url = self.domains['main']

    def navigate_to_list_view(self):
        self.navigate(self.LIST_VIEW_URL_PATH, use_main_site=True)
        self.page.wait_for_selector(self.selectors['search_results'], state='visible')
        self.page.click(self.selectors['filter_button'])
        self.wait_for_page_load()

    def set_price_filter(self, min_price: Union[int, str], max_price: Union[int, str]):
        self.page.fill(self.selectors['price_min_input'], str(min_price))
        self.page.fill(self.selectors['price_max_input'], str(max_price))

    def set_living_area_filter(self, min_area: Union[int, str], max_area: Union[int, str]):
        self.page.fill(self.selectors['living_area_min_input'], str(min_area))
        self.page.fill(self.selectors['living_area_max_input'], str(max_area))

    def set_keyword_filter(self, keyword: str):
        """Tick the exterior-space checkbox for tuin, balkon or garage"""
        selectors = get_keyword_checkbox(keyword)

        self.page.evaluate(SCROLL_TO_XPATH_SCRIPT, selectors['label'])
        self.page.wait_for_selector(selectors['checkbox'], state='visible')
        self.page.click(selectors['checkbox'])

        # Let the URL and result list update
        self.page.wait_for_timeout(500)

    def get_search_results(self) -> int:
        """Number of listing cards in the overview"""
        self.page.wait_for_selector(self.selectors['listings_container'])
        listings_count = self.page.locator(self.selectors['listing_cards']).count()
        logger.info(f"[{self.page_name}] Found {listings_count} listings")
        return listings_count

    def verify_filtered_results(self) -> str:
        """Current URL; applied filters are encoded in its query string"""
        return self.page.url

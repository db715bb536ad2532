from typing import Dict, Optional
import logging

from playwright.sync_api import Locator, Page

from funda_e2e.core.exceptions import PageObjectError
from funda_e2e.core.config import Settings
from funda_e2e.core.run_mode import RunMode
from funda_e2e.pages.base_page import BasePage
from funda_e2e.pages.filter_panel import fill_filter_panel
from funda_e2e.utils.strategies import Strategy, try_strategies

logger = logging.getLogger(__name__)

PAN_MAP_SCRIPT = """
({ lat, lng }) => {
    if (window.mapObject && typeof window.mapObject.panTo === 'function') {
        window.mapObject.panTo({ lat, lng });
        return true;
    }
    return false;
}
"""


class MapPage(BasePage):
    """Map search on www.funda.nl/zoeken/kaart"""

    page_name = "Map Page"

    MAP_SEARCH_PATH = 'zoeken/kaart/koop'

    map_elements = {
        'map_container': 'div[id="map"], div[componentid="map_results"]',
        'markers': 'div[data-test-id="map-container"] img',
        'info_window': 'div[data-test-id="map-info-window"]',
        'zoom_in_button': 'button[aria-label="Zoom in"]',
        'zoom_out_button': 'button[aria-label="Zoom out"]',

        'search_box': 'div[data-testid="searchBoxSuggestions-mobile"]',
        'search_box_input': 'input[id="SearchBox-input"], input[data-testid="search-box"]',
        'search_suggestions': '//ul[contains(@class,"suggestion-list")]',
        'search_results': '[data-test-id="search-box-list-item"]',

        'search_box_fallback': 'div[data-test-id="search-box-button"]',
        'search_button_fallback': 'button[data-test-id="map-search-button"]',

        'postcode_search': 'input[placeholder*="Zoek op postcode"]',
    }

    def __init__(self, page: Page, run_mode: RunMode = RunMode.NON_INTERACTIVE,
                 settings: Optional[Settings] = None):
        super().__init__(page, run_mode=run_mode, settings=settings)
        self.base_url = self.domains['main']

    def navigate_to_map_search(self):
        self.navigate(self.MAP_SEARCH_PATH, use_main_site=True)

        logged_in = self.is_logged_in()
        logger.info(f"[{self.page_name}] User logged in status before map search: {logged_in}")

        self.wait_for_element(self.map_elements['map_container'])

    @staticmethod
    def build_coordinates_path(latitude: float, longitude: float, zoom: int = 10) -> str:
        return (
            f'zoeken/kaart/koop?selected_area=["nl"]&zoom={zoom}'
            f'&centerLat={latitude}&centerLng={longitude}'
        )

    def navigate_to_coordinates(self, latitude: float, longitude: float, zoom: int = 10):
        self.navigate(self.build_coordinates_path(latitude, longitude, zoom), use_main_site=True)
        self.wait_for_map_load()

    def wait_for_map_load(self):
        """Wait for the map container, then (softly) for listing markers"""
        self.wait_for_element(self.map_elements['map_container'])

        try:
            self.page.wait_for_selector(self.map_elements['markers'], state='visible', timeout=10000)
        except Exception:
            logger.info(f"[{self.page_name}] Map markers did not appear, listings may not be loaded yet")

        # Let pan/zoom animations finish
        self.page.wait_for_timeout(1000)

    def _open_search_box(self) -> bool:
        outcome = try_strategies([
            Strategy("search box", lambda: self._click_if_visible(self.map_elements['search_box'])),
            Strategy("search box fallback",
                     lambda: self._click_if_visible(self.map_elements['search_box_fallback'])),
        ], label="open map search box")
        return outcome.succeeded

    def _click_if_visible(self, selector: str, timeout: int = 5000) -> bool:
        if not self.is_visible(selector, timeout=timeout):
            return False
        return self.safe_click(selector)

    def _click_matching_suggestion(self, location: str) -> bool:
        self.page.wait_for_selector(self.map_elements['search_suggestions'], timeout=10000)
        suggestion = self.page.locator(
            f'{self.map_elements["search_suggestions"]}//li[contains(., "{location}")]'
        )
        if suggestion.count() == 0:
            return False
        suggestion.first.click()
        return True

    def _click_location_text(self, location: str) -> bool:
        self.page.locator(f'text="{location}"').first.click(timeout=5000)
        return True

    def _press_enter(self) -> bool:
        self.page.keyboard.press('Enter')
        if self.is_visible(self.map_elements['search_button_fallback'], timeout=3000):
            logger.info(f"[{self.page_name}] Clicking search button as fallback")
            self.page.locator(self.map_elements['search_button_fallback']).click()
        return True

    def search_location(self, location: str):
        """Search the map for a place name or postcode"""
        logger.info(f"[{self.page_name}] Searching for location: {location}")

        if not self._open_search_box():
            logger.info(f"[{self.page_name}] Search box not visible, assuming input is already open")

        self.page.wait_for_selector(self.map_elements['search_box_input'], state='visible', timeout=10000)
        search_input = self.page.locator(self.map_elements['search_box_input']).first
        search_input.fill('')
        search_input.fill(location)

        outcome = try_strategies([
            Strategy("matching suggestion", lambda: self._click_matching_suggestion(location)),
            Strategy("location text", lambda: self._click_location_text(location)),
            Strategy("enter key", self._press_enter),
        ], label="submit map search")
        logger.info(f"[{self.page_name}] Search submitted via: {outcome.strategy}")

        self.wait_for_map_load()

    def click_on_map_coordinates(self, coordinates: Dict):
        """Pan the map to coordinates ({"lat": .., "lng": ..}) and click its centre"""
        self.wait_for_map_load()

        bounding_box = self.page.locator(self.map_elements['map_container']).first.bounding_box()
        if not bounding_box:
            raise PageObjectError("Could not get map bounding box")

        center_x = bounding_box['x'] + bounding_box['width'] / 2
        center_y = bounding_box['y'] + bounding_box['height'] / 2

        # Focus the map first
        self.page.mouse.click(center_x, center_y)

        panned = self.page.evaluate(PAN_MAP_SCRIPT, {'lat': coordinates['lat'], 'lng': coordinates['lng']})
        if not panned:
            logger.info(f"[{self.page_name}] Map object not found or panTo not available")

        self.page.wait_for_timeout(1000)
        self.page.mouse.click(center_x, center_y)

        try:
            self.page.wait_for_selector(self.map_elements['info_window'], state='visible', timeout=5000)
        except Exception:
            logger.info(f"[{self.page_name}] Info window did not appear after clicking on map")

    def get_visible_markers(self) -> Locator:
        self.wait_for_map_load()
        return self.page.locator(self.map_elements['markers'])

    def click_on_marker(self, index: int = 0) -> Dict:
        """Click a marker and return the address and price from its info window"""
        markers = self.get_visible_markers()
        count = markers.count()

        if count == 0:
            raise PageObjectError("No markers found on the map")
        if index >= count:
            raise PageObjectError(f"Marker index {index} is out of range (0-{count - 1})")

        markers.nth(index).click()
        info_window = self.wait_for_element(self.map_elements['info_window'])

        address = info_window.locator('h1, h2, h3').first.text_content()
        price = info_window.locator('*:has-text("€")').first.text_content()

        return {
            'address': (address or '').strip(),
            'price': (price or '').strip(),
            'info_window': info_window,
        }

    def apply_map_filters(self, filter_data: Dict):
        fill_filter_panel(self.page, filter_data, include_keywords=False)
        self.wait_for_map_load()

    def get_current_url(self) -> str:
        return self.page.url

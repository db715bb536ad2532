from typing import Any, List, Optional
import json
import logging

from playwright.sync_api import Page, Request, Response, Route

from funda_e2e.core.config import Settings
from funda_e2e.core.run_mode import RunMode
from funda_e2e.pages.base_page import BasePage

logger = logging.getLogger(__name__)


class NetworkMockPage(BasePage):
    """
    Request recording and response mocking for one page.

    Every request the page makes is appended to intercepted_urls in arrival
    order (duplicates kept). Requests matching a mock pattern are answered
    with canned JSON instead of reaching the network, and are also kept in
    mocked_requests. Which route wins when several match is up to Playwright.
    """

    page_name = "Network Mock Page"

    selectors = {
        'search_box': 'input[data-testid="search-box"]',
        'search_suggestions': '//ul[contains(@class,"suggestion-list")]',
        'search_results': '[data-test-id="search-box-list-item"]',
    }

    def __init__(self, page: Page, run_mode: RunMode = RunMode.NON_INTERACTIVE,
                 settings: Optional[Settings] = None):
        super().__init__(page, run_mode=run_mode, settings=settings)
        self.base_url = self.domains['main']

        self.intercepted_urls: List[str] = []
        self.mocked_requests: List[Request] = []
        self.is_monitoring_requests = False

    def _record(self, url: str):
        self.intercepted_urls.append(url)
        logger.debug(f"[{self.page_name}] Detected request: {url}")

    def _on_any_request(self, route: Route):
        self._record(route.request.url)
        route.continue_()

    def _on_response(self, response: Response):
        logger.debug(f"[{self.page_name}] Response received: {response.status} {response.url}")

    def start_request_monitoring(self):
        """Record every outgoing request; calling it twice is a no-op"""
        if self.is_monitoring_requests:
            return

        logger.info(f"[{self.page_name}] Starting network request monitoring")
        self.page.route('**', self._on_any_request)
        self.page.on('response', self._on_response)
        self.is_monitoring_requests = True

    def setup_mock_response(self, url_pattern: str, mock_data: Any,
                            status: int = 200, content_type: str = 'application/json'):
        """Answer requests matching url_pattern with mock_data as JSON"""
        logger.info(f"[{self.page_name}] Setting up mock for pattern: {url_pattern}")
        self.start_request_monitoring()

        body = json.dumps(mock_data)

        def fulfill(route: Route):
            url = route.request.url
            logger.info(f"[{self.page_name}] 🔵 INTERCEPTED for mocking: {url}")
            self._record(url)
            self.mocked_requests.append(route.request)
            route.fulfill(status=status, content_type=content_type, body=body)

        self.page.route(url_pattern, fulfill)

    def was_url_pattern_intercepted(self, pattern: str) -> bool:
        """True if any recorded URL contains pattern (literal, case-sensitive)"""
        matching_urls = self.get_matching_urls(pattern)
        logger.info(
            f"[{self.page_name}] '{pattern}': {len(matching_urls)} of "
            f"{len(self.intercepted_urls)} recorded URLs match"
        )
        return len(matching_urls) > 0

    def get_matching_urls(self, pattern: str) -> List[str]:
        return [url for url in self.intercepted_urls if pattern in url]

    def navigate_to_home(self):
        self.navigate(use_main_site=True)

    def perform_search(self, location: str, timeout: Optional[int] = 10000):
        """Type into the home search box so the site fires its search requests"""
        search_box = self.page.locator(self.selectors['search_box']).first
        search_box.click(timeout=timeout)
        search_box.fill(location)

        try:
            self.page.wait_for_selector(self.selectors['search_suggestions'], timeout=timeout)
            self.page.locator(self.selectors['search_results']).first.click(timeout=timeout)
        except Exception as e:
            logger.info(f"[{self.page_name}] No suggestions to click, pressing Enter: {e}")
            self.page.keyboard.press('Enter')

        self.wait_for_page_load()

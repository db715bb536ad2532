"""
Unit tests for HomePage and the shared filter panel
"""
import pytest

from funda_e2e.core.config import settings
from funda_e2e.pages.filter_panel import FILTER_SELECTORS, fill_filter_panel
from funda_e2e.pages.home_page import HomePage


@pytest.fixture
def home_page(mock_page):
    return HomePage(mock_page(url="https://www.funda.nl/"))


class TestHomePage:
    """Test HomePage"""

    def test_main_site_by_default(self, home_page):
        """Test the home page lives on the main site"""
        assert home_page.base_url == settings.main_base_url

    def test_navigate_to_home(self, home_page):
        """Test navigation to the main site root"""
        home_page.navigate_to_home()

        home_page.page.goto.assert_called_once_with(f"{settings.main_base_url}/")

    def test_search(self, home_page):
        """Test the location is typed and the first suggestion picked"""
        home_page.search("Rotterdam")

        page = home_page.page
        page.goto.assert_not_called()
        page.locator(HomePage.search_box['location_input']).fill.assert_called_once_with("Rotterdam")
        page.locator(HomePage.search_box['location_suggestions']).click.assert_called_once()
        page.wait_for_load_state.assert_called_with('networkidle')

    def test_search_from_blank_page(self, mock_page):
        """Test searching from about:blank navigates home first"""
        home_page = HomePage(mock_page(url="about:blank"))

        home_page.search("Utrecht")

        home_page.page.goto.assert_called_once_with(f"{settings.main_base_url}/")


class TestFillFilterPanel:
    """Test fill_filter_panel"""

    @pytest.fixture
    def filter_data(self):
        return {
            "price": {"min": 200000, "max": 500000},
            "livingArea": {"min": 50, "max": 150},
            "keywords": ["balkon", "tuin"],
        }

    def test_all_filters(self, mock_page, filter_data):
        """Test ranges and keywords are set and applied"""
        page = mock_page()

        fill_filter_panel(page, filter_data)

        page.select_option.assert_any_call(FILTER_SELECTORS['price_min'], '200000')
        page.select_option.assert_any_call(FILTER_SELECTORS['price_max'], '500000')
        page.select_option.assert_any_call(FILTER_SELECTORS['living_area_min'], '50')
        page.select_option.assert_any_call(FILTER_SELECTORS['living_area_max'], '150')
        page.locator(FILTER_SELECTORS['keyword_input']).fill.assert_called_once_with('balkon tuin')
        page.locator(FILTER_SELECTORS['apply_button']).click.assert_called_once()

    def test_without_keywords(self, mock_page, filter_data):
        """Test keywords can be left out"""
        page = mock_page()

        fill_filter_panel(page, filter_data, include_keywords=False)

        page.locator(FILTER_SELECTORS['keyword_input']).fill.assert_not_called()

    def test_partial_filters(self, mock_page):
        """Test missing ranges are skipped"""
        page = mock_page()

        fill_filter_panel(page, {"price": {"max": 300000}})

        page.select_option.assert_called_once_with(FILTER_SELECTORS['price_max'], '300000')

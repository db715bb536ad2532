"""
Unit tests for MapPage
"""
import pytest
from unittest.mock import MagicMock

from funda_e2e.core.config import settings
from funda_e2e.core.exceptions import PageObjectError
from funda_e2e.pages.map_page import PAN_MAP_SCRIPT, MapPage

ELEMENTS = MapPage.map_elements


@pytest.fixture
def map_page(mock_page):
    return MapPage(mock_page(url="https://www.funda.nl/zoeken/kaart/koop"))


class TestCoordinates:
    """Test coordinate navigation"""

    def test_build_coordinates_path(self):
        """Test the coordinate URL format"""
        path = MapPage.build_coordinates_path(52.3731, 4.8922, 14)

        assert path == 'zoeken/kaart/koop?selected_area=["nl"]&zoom=14&centerLat=52.3731&centerLng=4.8922'

    def test_default_zoom(self):
        """Test zoom defaults to 10"""
        assert 'zoom=10' in MapPage.build_coordinates_path(52.0, 5.0)

    def test_navigate_to_coordinates(self, map_page):
        """Test navigation goes to the main site"""
        map_page.navigate_to_coordinates(52.3731, 4.8922, 14)

        url = map_page.page.goto.call_args[0][0]
        assert url.startswith(settings.main_base_url)
        assert 'centerLat=52.3731' in url
        assert 'centerLng=4.8922' in url


class TestMapClicks:
    """Test clicking on the map"""

    def test_click_on_coordinates(self, map_page):
        """Test the map is panned and its centre clicked"""
        map_page.page.locator(ELEMENTS['map_container']).bounding_box.return_value = {
            'x': 0, 'y': 100, 'width': 800, 'height': 600,
        }
        map_page.page.evaluate.return_value = True

        map_page.click_on_map_coordinates({'lat': 52.3731, 'lng': 4.8922})

        map_page.page.evaluate.assert_called_once_with(PAN_MAP_SCRIPT, {'lat': 52.3731, 'lng': 4.8922})
        map_page.page.mouse.click.assert_called_with(400.0, 400.0)
        assert map_page.page.mouse.click.call_count == 2

    def test_click_without_bounding_box(self, map_page):
        """Test a map without a bounding box raises"""
        map_page.page.locator(ELEMENTS['map_container']).bounding_box.return_value = None

        with pytest.raises(PageObjectError, match="bounding box"):
            map_page.click_on_map_coordinates({'lat': 52.0, 'lng': 5.0})

    def test_no_markers(self, map_page):
        """Test clicking a marker on an empty map raises"""
        map_page.page.locator(ELEMENTS['markers']).count.return_value = 0

        with pytest.raises(PageObjectError, match="No markers"):
            map_page.click_on_marker(0)

    def test_marker_index_out_of_range(self, map_page):
        """Test a marker index past the end raises"""
        map_page.page.locator(ELEMENTS['markers']).count.return_value = 1

        with pytest.raises(PageObjectError, match="out of range"):
            map_page.click_on_marker(3)

    def test_click_marker(self, map_page):
        """Test the info window address and price are returned"""
        markers = map_page.page.locator(ELEMENTS['markers'])
        markers.count.return_value = 2
        info_window = map_page.page.locator(ELEMENTS['info_window'])

        texts = {'h1, h2, h3': ' Damrak 1 ', '*:has-text("€")': '€ 500.000 k.k.'}

        def info_locator(selector):
            locator = MagicMock()
            locator.first.text_content.return_value = texts[selector]
            return locator

        info_window.locator.side_effect = info_locator

        details = map_page.click_on_marker(1)

        markers.nth.assert_called_once_with(1)
        assert details['address'] == 'Damrak 1'
        assert details['price'] == '€ 500.000 k.k.'
        assert details['info_window'] is info_window


class TestSearchLocation:
    """Test search fallbacks"""

    def test_enter_key_fallback(self, map_page):
        """Test Enter is pressed when no suggestion or text can be clicked"""
        page = map_page.page

        def wait_for_selector(selector, **kwargs):
            if selector == ELEMENTS['search_suggestions']:
                raise TimeoutError("no suggestions")

        page.wait_for_selector.side_effect = wait_for_selector
        page.locator('text="Amsterdam"').click.side_effect = TimeoutError("not found")

        map_page.search_location("Amsterdam")

        page.locator(ELEMENTS['search_box_input']).fill.assert_called_with("Amsterdam")
        page.keyboard.press.assert_called_once_with('Enter')

    def test_matching_suggestion(self, map_page):
        """Test a suggestion containing the location is clicked"""
        page = map_page.page
        suggestion_selector = f'{ELEMENTS["search_suggestions"]}//li[contains(., "Utrecht")]'
        page.locator(suggestion_selector).count.return_value = 1

        map_page.search_location("Utrecht")

        page.locator(suggestion_selector).click.assert_called_once()
        page.keyboard.press.assert_not_called()


class TestOpenSearchBox:
    """Test opening the map search box"""

    def test_primary_search_box(self, map_page):
        """Test the primary search box is clicked when visible"""
        map_page.page.visible_selectors.add(ELEMENTS['search_box'])

        assert map_page._open_search_box() is True
        map_page.page.locator(ELEMENTS['search_box']).click.assert_called_once_with(timeout=5000)

    def test_failed_click_falls_back(self, map_page):
        """Test a visible but unclickable search box falls back to the second selector"""
        page = map_page.page
        page.visible_selectors.update([ELEMENTS['search_box'], ELEMENTS['search_box_fallback']])
        page.locator(ELEMENTS['search_box']).click.side_effect = TimeoutError("intercepted")

        assert map_page._open_search_box() is True
        page.locator(ELEMENTS['search_box_fallback']).click.assert_called_once_with(timeout=5000)

    def test_nothing_visible(self, map_page):
        """Test no visible search box is not clicked"""
        assert map_page._open_search_box() is False
        map_page.page.locator(ELEMENTS['search_box']).click.assert_not_called()

"""Page objects for funda.nl"""

from funda_e2e.pages.base_page import BasePage
from funda_e2e.pages.captcha import CaptchaHandler
from funda_e2e.pages.home_page import HomePage
from funda_e2e.pages.listing_details_page import ListingDetailsPage
from funda_e2e.pages.login_page import LoginPage
from funda_e2e.pages.map_page import MapPage
from funda_e2e.pages.network_mock_page import NetworkMockPage
from funda_e2e.pages.property_page import PropertyPage
from funda_e2e.pages.search_results_page import SearchResultsPage

__all__ = [
    'BasePage',
    'CaptchaHandler',
    'HomePage',
    'ListingDetailsPage',
    'LoginPage',
    'MapPage',
    'NetworkMockPage',
    'PropertyPage',
    'SearchResultsPage',
]

"""
Scenario-level commands shared by the end-to-end tests.

Each command builds the page objects it needs and strings their actions
together, so a test reads as a user journey.
"""

from pathlib import Path
from typing import Dict, Optional, Union
import logging

from playwright.sync_api import BrowserContext, Page

from funda_e2e.core.config import Settings, settings as default_settings
from funda_e2e.core.run_mode import RunMode
from funda_e2e.core.session_state import save_browser_state
from funda_e2e.core.test_data import Credentials
from funda_e2e.pages.base_page import BasePage
from funda_e2e.pages.home_page import HomePage
from funda_e2e.pages.listing_details_page import ListingDetailsPage
from funda_e2e.pages.login_page import LoginPage
from funda_e2e.pages.map_page import MapPage
from funda_e2e.pages.search_results_page import SearchResultsPage

logger = logging.getLogger(__name__)


def initialize_pages(page: Page, use_main_site: bool = False,
                     run_mode: RunMode = RunMode.NON_INTERACTIVE,
                     settings: Optional[Settings] = None) -> Dict[str, BasePage]:
    """Build every page object for one browser page"""
    settings = settings or default_settings
    domain = settings.main_base_url if use_main_site else settings.auth_base_url

    return {
        'base_page': BasePage(page, domain=domain, run_mode=run_mode, settings=settings),
        'login_page': LoginPage(page, run_mode=run_mode, settings=settings),
        'home_page': HomePage(page, run_mode=run_mode, settings=settings),
        'search_results_page': SearchResultsPage(page, run_mode=run_mode, settings=settings),
        'listing_details_page': ListingDetailsPage(page, run_mode=run_mode, settings=settings),
        'map_page': MapPage(page, run_mode=run_mode, settings=settings),
    }


def create_account(page: Page, user_data: Dict,
                   run_mode: RunMode = RunMode.NON_INTERACTIVE,
                   settings: Optional[Settings] = None) -> bool:
    login_page = LoginPage(page, run_mode=run_mode, settings=settings)
    return login_page.register(user_data)


def login(page: Page, credentials: Credentials,
          run_mode: RunMode = RunMode.NON_INTERACTIVE,
          settings: Optional[Settings] = None) -> bool:
    login_page = LoginPage(page, run_mode=run_mode, settings=settings)
    login_page.navigate_to_login()
    return login_page.login(credentials.email, credentials.password)


def save_login_state(context: BrowserContext,
                     state_file_path: Optional[Union[str, Path]] = None) -> bool:
    return save_browser_state(context, state_file_path or default_settings.get_state_path())


def search_property(page: Page, location: str,
                    run_mode: RunMode = RunMode.NON_INTERACTIVE):
    home_page = HomePage(page, run_mode=run_mode)
    home_page.navigate_to_home()
    home_page.search(location)


def navigate_to_map_search(page: Page, run_mode: RunMode = RunMode.NON_INTERACTIVE):
    MapPage(page, run_mode=run_mode).navigate_to_map_search()


def click_on_map_coordinates(page: Page, coordinates: Dict,
                             run_mode: RunMode = RunMode.NON_INTERACTIVE):
    MapPage(page, run_mode=run_mode).click_on_map_coordinates(coordinates)


def compare_listing_details(list_view_details: Dict, card_view_details: Dict) -> Dict:
    """Field-by-field comparison of one listing seen in two views"""
    return {
        'title_match': list_view_details['title'] == card_view_details['title'],
        'price_match': list_view_details['price'] == card_view_details['price'],
        'location_match': list_view_details['location'] == card_view_details['location'],
        'id_match': list_view_details['listing_id'] == card_view_details['listing_id'],
        'list_view_details': list_view_details,
        'card_view_details': card_view_details,
    }


def validate_listing_in_both_views(page: Page, result_index: int = 0,
                                   run_mode: RunMode = RunMode.NON_INTERACTIVE) -> Dict:
    """Read one result in list view, then card view, and compare"""
    search_results_page = SearchResultsPage(page, run_mode=run_mode)

    list_switch = search_results_page.switch_to_list_view()
    list_view_details = search_results_page.get_result_details(result_index)

    card_switch = search_results_page.switch_to_card_view()
    card_view_details = search_results_page.get_result_details(result_index)

    logger.info(
        f"[Commands] Compared listing {result_index}, list view: {list_switch}, card view: {card_switch}"
    )

    results = compare_listing_details(list_view_details, card_view_details)
    results['list_view_switch'] = list_switch
    results['card_view_switch'] = card_switch
    return results

"""
Browser fixtures for the live funda.nl scenarios.

Builds on pytest-playwright's page/context fixtures: the stored login
snapshot is loaded into every new context when it holds cookies, and the
run mode follows --headed (or HEADLESS=false).
"""
import logging
import pytest
from playwright.sync_api import Page

from funda_e2e.core.config import settings
from funda_e2e.core.logging_setup import configure_logging
from funda_e2e.core.run_mode import RunMode
from funda_e2e.core.session_state import is_state_file_valid
from funda_e2e.core.test_data import get_test_data
from funda_e2e.services.session import ensure_logged_in

logger = logging.getLogger(__name__)


def pytest_configure(config):
    configure_logging(settings)


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args):
    return settings.get_launch_options(browser_type_launch_args)


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args):
    context_args = {
        **browser_context_args,
        "viewport": {"width": 1280, "height": 720},
        "locale": "nl-NL",
    }

    state_path = settings.get_state_path()
    if is_state_file_valid(state_path):
        logger.info(f"[E2E] Loading stored session from {state_path}")
        context_args["storage_state"] = str(state_path)

    return context_args


@pytest.fixture(scope="session")
def run_mode(pytestconfig) -> RunMode:
    headed = bool(pytestconfig.getoption("headed", default=False)) or not settings.headless
    mode = RunMode.from_headless(not headed)
    logger.info(f"[E2E] Run mode: {mode.value}")
    return mode


@pytest.fixture(autouse=True)
def page_timeouts(page: Page):
    page.set_default_timeout(settings.default_timeout_ms)
    page.set_default_navigation_timeout(settings.navigation_timeout_ms)
    return page


@pytest.fixture
def logged_in(page: Page, run_mode: RunMode):
    """Skip the scenario when no authenticated session can be obtained"""
    if not ensure_logged_in(page, run_mode=run_mode):
        pytest.skip("Could not log in; scenario needs an authenticated session")
    return page


@pytest.fixture(scope="session")
def search_data():
    return get_test_data("search")


@pytest.fixture(scope="session")
def filter_data():
    return get_test_data("filters")


@pytest.fixture(scope="session")
def mock_api_data():
    return get_test_data("mockApi")

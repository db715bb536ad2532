"""
Pytest configuration and shared fixtures for Funda E2E unit tests.
"""
import json
import pytest
from unittest.mock import MagicMock
from typing import Iterable

from funda_e2e.core.config import Settings


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a temporary data directory"""
    return Settings(
        auth_base_url="https://login.funda.nl",
        main_base_url="https://www.funda.nl",
        data_dir=str(tmp_path),
        state_file="state.json",
        test_data_file="test-data.json",
        credentials_file="credentials.json",
        headless=True,
        captcha_check_interval_ms=1000,
        captcha_timeout_ms=5000,
        log_file="",
    )


def build_mock_page(url: str = "https://login.funda.nl/account/login",
                    visible: Iterable[str] = ()) -> MagicMock:
    """
    Mock Playwright Page whose locators report visibility from a set.

    page.visible_selectors can be changed during a test; locator(sel) always
    returns the same mock for the same selector and .first returns itself.
    """
    page = MagicMock()
    page.url = url
    page.visible_selectors = set(visible)

    locators = {}

    def locator_side_effect(selector):
        if selector not in locators:
            locator = MagicMock(name=f"locator({selector})")
            locator.is_visible = MagicMock(
                side_effect=lambda *args, **kwargs: selector in page.visible_selectors
            )
            locator.first = locator
            locators[selector] = locator
        return locators[selector]

    page.locator = MagicMock(side_effect=locator_side_effect)
    return page


@pytest.fixture
def mock_page():
    """Factory for mock pages: mock_page(url=..., visible=[...])"""
    return build_mock_page


@pytest.fixture
def write_json(tmp_path):
    """Write an object as JSON under tmp_path and return the path"""
    def _write(name, data):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding='utf-8')
        return path
    return _write


@pytest.fixture
def sample_result_details():
    """Details of one listing as read from the results page"""
    return {
        'title': 'Kalverstraat 1',
        'price': '€ 450.000 k.k.',
        'location': '1012 NX Amsterdam',
        'listing_id': '43921073',
        'element': None,
    }

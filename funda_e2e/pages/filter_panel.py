"""Shared filter drawer used by the home, map and search results pages"""

from typing import Dict
import logging

from playwright.sync_api import Page

logger = logging.getLogger(__name__)

FILTER_SELECTORS = {
    'filter_button': 'button[data-test-id="search-filters-button"]',
    'price_min': 'select[name="filter_KoopprijsVan"]',
    'price_max': 'select[name="filter_KoopprijsTot"]',
    'living_area_min': 'select[name="filter_WoonOppervlakteVan"]',
    'living_area_max': 'select[name="filter_WoonOppervlakteTot"]',
    'keyword_input': 'input[name="filter_Trefwoorden"]',
    'apply_button': 'button[data-interaction-id="search-filters-apply"]',
}


def fill_filter_panel(page: Page, filter_data: Dict, include_keywords: bool = True):
    """
    Open the filter drawer, set the ranges present in filter_data and apply.

    filter_data shape (every key optional):
        {"price": {"min": 200000, "max": 500000},
         "livingArea": {"min": 50, "max": 150},
         "keywords": ["tuin", "balkon"]}
    """
    page.locator(FILTER_SELECTORS['filter_button']).click()

    ranges = [
        ('price', 'price_min', 'price_max'),
        ('livingArea', 'living_area_min', 'living_area_max'),
    ]
    for data_key, min_key, max_key in ranges:
        bounds = filter_data.get(data_key) or {}
        if bounds.get('min'):
            page.select_option(FILTER_SELECTORS[min_key], str(bounds['min']))
        if bounds.get('max'):
            page.select_option(FILTER_SELECTORS[max_key], str(bounds['max']))

    keywords = filter_data.get('keywords') or []
    if include_keywords and keywords:
        page.locator(FILTER_SELECTORS['keyword_input']).fill(' '.join(keywords))

    logger.info(f"[Filter Panel] Applying filters: {filter_data}")
    page.locator(FILTER_SELECTORS['apply_button']).click()

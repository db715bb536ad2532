"""
Same listing in list and card view
"""
import pytest

from funda_e2e.services.commands import initialize_pages, search_property, validate_listing_in_both_views

pytestmark = pytest.mark.e2e


def test_listing_matches_in_both_views(page, run_mode, search_data):
    """Test title, price and location agree between list and card view"""
    search_property(page, search_data['locations'][2], run_mode=run_mode)

    search_results_page = initialize_pages(page, run_mode=run_mode)['search_results_page']
    assert search_results_page.wait_for_search_results()

    result_count = search_results_page.get_result_count()
    assert result_count > 0

    for index in range(min(3, result_count)):
        results = validate_listing_in_both_views(page, index, run_mode=run_mode)

        assert results['title_match'], results
        assert results['price_match'], results
        assert results['location_match'], results

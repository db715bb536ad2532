"""
Unit tests for browser storage-state persistence.
"""
import json
from unittest.mock import Mock

from funda_e2e.core.session_state import (
    apply_state_cookies,
    get_cookies,
    is_state_file_valid,
    is_state_valid,
    load_state,
    save_browser_state,
)


class TestStateValidity:
    """Test the at-least-one-cookie rule"""

    def test_state_with_cookie_is_valid(self):
        """Test a snapshot with one cookie is valid"""
        assert is_state_valid({"cookies": [{"name": "a", "value": "b"}]}) is True

    def test_state_without_cookies_is_invalid(self):
        """Test an empty cookie list is invalid"""
        assert is_state_valid({"cookies": []}) is False

    def test_missing_state_is_invalid(self):
        """Test None is invalid"""
        assert is_state_valid(None) is False

    def test_malformed_cookies_are_ignored(self):
        """Test a non-list cookies value is treated as no cookies"""
        assert get_cookies({"cookies": "oops"}) == []
        assert is_state_valid({"cookies": "oops"}) is False

    def test_missing_file_is_invalid(self, tmp_path):
        """Test a missing state file is invalid"""
        assert is_state_file_valid(tmp_path / "state.json") is False

    def test_file_with_cookies_is_valid(self, write_json):
        """Test a state file with cookies is valid"""
        path = write_json("state.json", {"cookies": [{"name": "a", "value": "b"}], "origins": []})

        assert is_state_file_valid(path) is True


class TestLoadState:
    """Test reading snapshots from disk"""

    def test_missing_file(self, tmp_path):
        """Test missing file returns None"""
        assert load_state(tmp_path / "state.json") is None

    def test_invalid_json(self, tmp_path):
        """Test unreadable file returns None"""
        path = tmp_path / "state.json"
        path.write_text("not json", encoding="utf-8")

        assert load_state(path) is None

    def test_non_object(self, write_json):
        """Test a JSON array returns None"""
        assert load_state(write_json("state.json", [])) is None

    def test_load(self, write_json):
        """Test a valid snapshot is returned"""
        state = {"cookies": [{"name": "a", "value": "b"}], "origins": []}

        assert load_state(write_json("state.json", state)) == state


class TestApplyState:
    """Test replaying cookies into a context"""

    def test_adds_cookies(self):
        """Test cookies are added to the context"""
        context = Mock()
        cookies = [{"name": "a", "value": "b"}, {"name": "c", "value": "d"}]

        count = apply_state_cookies(context, {"cookies": cookies})

        assert count == 2
        context.add_cookies.assert_called_once_with(cookies)

    def test_no_cookies(self):
        """Test nothing is added for an empty snapshot"""
        context = Mock()

        assert apply_state_cookies(context, {"cookies": []}) == 0
        context.add_cookies.assert_not_called()


class TestSaveBrowserState:
    """Test writing snapshots to disk"""

    def test_save(self, tmp_path):
        """Test storage state is written as JSON, creating directories"""
        state = {"cookies": [{"name": "a", "value": "b"}], "origins": []}
        context = Mock()
        context.storage_state.return_value = state
        path = tmp_path / "nested" / "state.json"

        assert save_browser_state(context, path) is True
        assert json.loads(path.read_text(encoding="utf-8")) == state

    def test_save_failure(self, tmp_path):
        """Test failures are reported as False"""
        context = Mock()
        context.storage_state.side_effect = RuntimeError("context closed")

        assert save_browser_state(context, tmp_path / "state.json") is False
        assert not (tmp_path / "state.json").exists()

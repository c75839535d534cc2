"""
SafeStore - fallback, round-trip and failure-absorption behaviour.
"""

import pytest
from unittest.mock import patch, MagicMock

from zervos.core.errors import QuotaExceededError
from zervos.core.medium import MemoryMedium, SQLiteMedium
from zervos.core.store import SafeStore, encode_value


class TestSafeStoreReads:
    """Test reads resolve to the fallback on every failure path."""

    def test_absent_key_returns_fallback(self, store):
        """Test keys never written yield the fallback."""
        fallback = {"default": True}
        assert store.get("never_written", fallback) is fallback
        assert store.get("other_key", []) == []

    def test_corrupt_record_returns_fallback(self, store, medium):
        """Test a non-JSON record yields the fallback."""
        medium.set_item("workspaces", "{not json")

        assert store.get("workspaces", ["fallback"]) == ["fallback"]

    def test_corrupt_record_left_in_place(self, store, medium):
        """Test reading a corrupt record does not repair or delete it."""
        medium.set_item("workspaces", "{not json")

        store.get("workspaces", [])

        assert medium.get_item("workspaces") == "{not json"

    def test_corrupt_record_overwritten_by_valid_write(self, store, medium):
        """Test a later correct write replaces a corrupt record."""
        medium.set_item("workspaces", "garbage")
        assert store.set("workspaces", [{"id": "w1"}]) is True
        assert store.get("workspaces", []) == [{"id": "w1"}]

    def test_null_record_returns_fallback(self, store, medium):
        """Test a record holding JSON null yields the fallback."""
        medium.set_item("selectedWorkspaceId", "null")

        assert store.get("selectedWorkspaceId", "fallback") == "fallback"

    def test_empty_record_returns_fallback(self, store, medium):
        """Test an empty-string record counts as absent."""
        medium.set_item("zervos_team_session", "")

        result = store.read("zervos_team_session", None)
        assert result.value is None
        assert result.status == "absent"

    def test_falsy_json_values_are_not_fallback(self, store):
        """Test 0, false and empty containers are real values."""
        store.set("zero", 0)
        store.set("flag", False)
        store.set("empty", [])

        assert store.get("zero", 99) == 0
        assert store.get("flag", True) is False
        assert store.get("empty", ["x"]) == []

    def test_medium_failure_returns_fallback(self, broken_store):
        """Test an unavailable medium yields the fallback without raising."""
        result = broken_store.read("workspaces", [])

        assert result.value == []
        assert result.status == "unavailable"
        assert result.used_fallback

    @patch('zervos.core.store.logger')
    def test_malformed_record_logged_as_warning(self, mock_logger, store, medium):
        """Test corruption is reported through the diagnostic log."""
        medium.set_item("workspaces", "{oops")

        store.get("workspaces", [])

        mock_logger.log_store_failure.assert_called_once()
        args, kwargs = mock_logger.log_store_failure.call_args
        assert args[0] == "parse"
        assert args[1] == "workspaces"
        assert kwargs["kind"] == "malformed"

    def test_read_reports_status(self, store, medium):
        """Test read() distinguishes ok, absent and malformed outcomes."""
        store.set("good", {"a": 1})
        medium.set_item("bad", "[1,")

        assert store.read("good", None).status == "ok"
        assert not store.read("good", None).used_fallback
        assert store.read("missing", None).status == "absent"
        assert store.read("bad", None).status == "malformed"

    def test_deeply_nested_record_returns_fallback(self, store, medium):
        """Test a record nested past the parser's recursion limit reads as malformed."""
        medium.set_item("workspaces", "[" * 100000 + "]" * 100000)

        assert store.get("workspaces", "fallback") == "fallback"
        assert store.read("workspaces", None).status == "malformed"
        assert medium.get_item("workspaces").startswith("[[[")


class TestSafeStoreRoundTrip:
    """Test set followed by get returns an equal value."""

    @pytest.mark.parametrize("value", [
        [{"id": "w1", "name": "Main", "maxDigits": 4}],
        {"currentStep": 3, "stepData": {"2": {"industries": ["Real Estate"]}}},
        "1699999999999",
        42,
        {"nested": {"list": [1, 2.5, None, True, "é"]}},
    ])
    def test_round_trip(self, store, value):
        assert store.set("key", value) is True
        assert store.get("key", "fallback") == value

    def test_round_trip_sqlite(self, tmp_path):
        """Test round trip survives reopening the SQLite medium."""
        path = str(tmp_path / "store.db")
        SafeStore(SQLiteMedium(path)).set("workspaces", [{"id": "w1"}])

        reopened = SafeStore(SQLiteMedium(path))
        assert reopened.get("workspaces", []) == [{"id": "w1"}]

    def test_canonical_text_is_compact_json(self):
        assert encode_value({"a": [1, 2]}) == '{"a":[1,2]}'


class TestSafeStoreWrites:
    """Test writes report failure as False and never raise."""

    def test_unserializable_value_not_written(self, store, medium):
        """Test values json cannot encode leave the medium untouched."""
        assert store.set("bad", {"when": object()}) is False
        assert medium.get_item("bad") is None

    def test_deeply_nested_value_not_written(self, store, medium):
        """Test a value nested past the encoder's recursion limit is refused."""
        value = []
        for _ in range(100000):
            value = [value]

        assert store.set("deep", value) is False
        assert medium.get_item("deep") is None

    def test_quota_exceeded_returns_false(self):
        """Test a quota failure is absorbed."""
        store = SafeStore(MemoryMedium(quota_bytes=20))

        assert store.set("small", "x") is True
        assert store.set("large", "y" * 100) is False
        assert store.get("large", "fallback") == "fallback"
        assert store.get("small", None) == "x"

    def test_medium_failure_on_write(self, broken_store):
        assert broken_store.set("workspaces", []) is False
        assert broken_store.remove("workspaces") is False
        assert broken_store.clear() is False
        assert broken_store.keys() == []

    def test_remove_absent_key_succeeds(self, store):
        assert store.remove("never_written") is True

    def test_clear_removes_everything(self, store):
        store.set("a", 1)
        store.set("b", 2)

        assert store.clear() is True
        assert store.get("a", None) is None
        assert store.keys() == []

    def test_keys_with_prefix(self, store):
        store.set("zervos_sales_calls::w1", [])
        store.set("zervos_sales_calls::w2", [])
        store.set("workspaces", [])

        assert sorted(store.keys("zervos_sales_calls::")) == [
            "zervos_sales_calls::w1",
            "zervos_sales_calls::w2",
        ]

    def test_set_does_not_raise_on_unexpected_medium_error(self):
        """Test arbitrary medium exceptions are absorbed too."""
        medium = MagicMock()
        medium.set_item.side_effect = RuntimeError("boom")
        store = SafeStore(medium)

        assert store.set("key", 1) is False

    def test_quota_error_details(self):
        error = QuotaExceededError("k", 30, 20)
        assert error.needed == 30
        assert "quota is 20" in str(error)

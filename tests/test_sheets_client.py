"""
Tests for SheetsClient batched reads.
gspread and credentials are patched; no network access.
"""
import pytest
from unittest.mock import MagicMock, patch

from gspread.exceptions import GSpreadException

from lib.errors import TransportError
from sheets_client import SheetsClient, map_value_ranges

RANGES = ["DB!A4:A", "DB!B4:B", "DB!C4:C", "DB!G4:H40"]


@pytest.fixture
def gc():
    """Patched gspread client returned by gspread.authorize."""
    with patch("sheets_client.Credentials") as creds, \
         patch("sheets_client.gspread.authorize") as authorize:
        creds.from_service_account_info.return_value = MagicMock()
        client = MagicMock()
        authorize.return_value = client
        yield client


@pytest.fixture
def client(gc):
    return SheetsClient({"type": "service_account", "project_id": "test"})


class TestSheetsClientInit:
    """Tests for SheetsClient construction"""

    def test_accepts_json_string(self):
        with patch("sheets_client.Credentials") as creds, \
             patch("sheets_client.gspread.authorize"):
            SheetsClient('{"type": "service_account"}')
            info = creds.from_service_account_info.call_args.args[0]
            assert info == {"type": "service_account"}

    def test_uses_readonly_scope(self):
        with patch("sheets_client.Credentials") as creds, \
             patch("sheets_client.gspread.authorize"):
            SheetsClient({"type": "service_account"})
            scopes = creds.from_service_account_info.call_args.kwargs["scopes"]
            assert scopes == ["https://www.googleapis.com/auth/spreadsheets.readonly"]


class TestGetBatchData:
    """Tests for get_batch_data"""

    def test_maps_results_by_position(self, client, gc):
        ss = gc.open_by_key.return_value
        ss.values_batch_get.return_value = {
            "spreadsheetId": "sheet-id",
            "valueRanges": [
                {"range": "DB!A4:A1000", "values": [["alice"], ["bob"]]},
                {"range": "DB!B4:B1000"},
                {"range": "DB!C4:C1000", "values": [["erin"]]},
                {"range": "DB!G4:H40", "values": [["g1", "h1"]]},
            ],
        }

        batch = client.get_batch_data("sheet-id", RANGES)

        ss.values_batch_get.assert_called_once_with(RANGES)
        assert batch == {
            "DB!A4:A": [["alice"], ["bob"]],
            "DB!B4:B": [],
            "DB!C4:C": [["erin"]],
            "DB!G4:H40": [["g1", "h1"]],
        }

    def test_caches_spreadsheet_handle(self, client, gc):
        gc.open_by_key.return_value.values_batch_get.return_value = {"valueRanges": []}
        client.get_batch_data("sheet-id", RANGES)
        client.get_batch_data("sheet-id", RANGES)
        gc.open_by_key.assert_called_once_with("sheet-id")

    def test_empty_ranges_skip_api(self, client, gc):
        assert client.get_batch_data("sheet-id", []) == {}
        gc.open_by_key.assert_not_called()

    def test_gspread_error_becomes_transport_error(self, client, gc):
        gc.open_by_key.return_value.values_batch_get.side_effect = GSpreadException("quota exceeded")
        with pytest.raises(TransportError) as exc_info:
            client.get_batch_data("sheet-id", RANGES)
        assert exc_info.value.message == "quota exceeded"

    def test_network_error_becomes_transport_error(self, client, gc):
        gc.open_by_key.side_effect = ConnectionError("connection reset")
        with pytest.raises(TransportError) as exc_info:
            client.get_batch_data("sheet-id", RANGES)
        assert "connection reset" in exc_info.value.message

    def test_failure_clears_cached_handle(self, client, gc):
        ss = gc.open_by_key.return_value
        ss.values_batch_get.return_value = {"valueRanges": []}
        client.get_batch_data("sheet-id", RANGES)

        ss.values_batch_get.side_effect = GSpreadException("not found")
        with pytest.raises(TransportError):
            client.get_batch_data("sheet-id", RANGES)

        ss.values_batch_get.side_effect = None
        client.get_batch_data("sheet-id", RANGES)
        assert gc.open_by_key.call_count == 2


class TestMapValueRanges:
    """Tests for map_value_ranges"""

    def test_fewer_value_ranges_than_keys(self):
        result = map_value_ranges(["A", "B"], {"valueRanges": [{"values": [["x"]]}]})
        assert result == {"A": [["x"]]}

    def test_missing_value_ranges(self):
        assert map_value_ranges(["A"], {}) == {}

    @pytest.mark.parametrize("payload", [None, [], "oops", {"valueRanges": "oops"}])
    def test_malformed_payload_raises(self, payload):
        with pytest.raises(TransportError):
            map_value_ranges(["A"], payload)

    def test_non_dict_entry_maps_to_empty(self):
        assert map_value_ranges(["A"], {"valueRanges": ["junk"]}) == {"A": []}

"""
Pytest configuration and fixtures for sheet data tests.
"""
import os
import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock

# Set test environment variables before importing anything
os.environ.setdefault("GOOGLE_CREDENTIALS_JSON", '{"type": "service_account", "project_id": "test"}')

FIXED_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


# ========== Response Assertion Helpers ==========

class ResponseAssertions:
    """Helper class for asserting API response structures."""

    @staticmethod
    def assert_success(response: dict, op: str | None = None) -> dict:
        """Assert response is successful and return data.

        Args:
            response: The response dict to check
            op: Optional operation name to verify

        Returns:
            The data dict from the response
        """
        assert response.get("ok") is True, f"Expected success, got: {response}"
        if op:
            assert response.get("op") == op, f"Expected op={op}, got {response.get('op')}"
        return response.get("data", {})

    @staticmethod
    def assert_error(response: dict, code: str, op: str | None = None) -> dict:
        """Assert response is an error with given code.

        Args:
            response: The response dict to check
            code: Expected error code
            op: Optional operation name to verify

        Returns:
            The error dict from the response
        """
        assert response.get("ok") is False, f"Expected error, got success: {response}"
        assert response.get("error", {}).get("code") == code, \
            f"Expected error code {code}, got {response.get('error', {}).get('code')}"
        if op:
            assert response.get("op") == op, f"Expected op={op}, got {response.get('op')}"
        return response.get("error", {})


@pytest.fixture
def assertions():
    """Fixture providing response assertion helpers."""
    return ResponseAssertions()


@pytest.fixture
def sample_batch_data():
    """Raw batch result for sheet "DB", keyed by requested range."""
    return {
        "DB!A4:A": [["alice"], ["  "], [""], ["bob"]],
        "DB!B4:B": [["carol"], [" dave "]],
        "DB!C4:C": [["erin"]],
        "DB!G4:H40": [["g1", "h1"], ["g2"], ["", "h3"], ["g4", "h4"]],
    }


@pytest.fixture
def mock_sheets_client(sample_batch_data):
    """
    Mock SheetsClient for unit tests.
    get_batch_data returns sample_batch_data unless reconfigured per test.
    """
    mock = MagicMock()
    mock.get_batch_data.return_value = sample_batch_data
    return mock


@pytest.fixture
def fixed_clock():
    """Clock returning FIXED_TIME."""
    return lambda: FIXED_TIME


@pytest.fixture
def service(mock_sheets_client, fixed_clock):
    """SheetDataService wired to the mock client and fixed clock."""
    from core.sheet_data_service import SheetDataService
    return SheetDataService(mock_sheets_client, clock=fixed_clock)

"""
Tests for range specs and sheet configuration.
"""
import dataclasses

import pytest

from lib.errors import ConfigError, ErrorCode
from lib.ranges import RangeRole, RangeSpec, SheetConfig, build_range_specs


class TestBuildRangeSpecs:
    """Tests for build_range_specs"""

    def test_layout_for_db_sheet(self):
        specs = build_range_specs("DB")
        assert [(s.partition, s.range_key, s.role) for s in specs] == [
            ("normals", "DB!A4:A", RangeRole.LIST),
            ("newbies", "DB!B4:B", RangeRole.LIST),
            ("leaders", "DB!C4:C", RangeRole.LIST),
            ("filter_pairs", "DB!G4:H40", RangeRole.PAIR),
        ]

    def test_uses_sheet_name(self):
        keys = [s.range_key for s in build_range_specs("Roster")]
        assert keys == ["Roster!A4:A", "Roster!B4:B", "Roster!C4:C", "Roster!G4:H40"]

    def test_range_keys_unique(self):
        keys = [s.range_key for s in build_range_specs("DB")]
        assert len(keys) == len(set(keys))

    def test_specs_are_immutable(self):
        spec = build_range_specs("DB")[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            spec.range_key = "X!A1"  # type: ignore[misc]

    def test_spec_equality(self):
        assert build_range_specs("DB")[0] == RangeSpec("normals", "DB!A4:A", RangeRole.LIST)


class TestSheetConfig:
    """Tests for SheetConfig.create"""

    def test_create(self):
        config = SheetConfig.create("1IbHBh5SACa505qLB6eNZEARwRofDme_p1NmyRCL7xPA", "DB")
        assert config.spreadsheet_id == "1IbHBh5SACa505qLB6eNZEARwRofDme_p1NmyRCL7xPA"
        assert config.sheet_name == "DB"

    def test_strips_quotes_and_whitespace(self):
        config = SheetConfig.create(' "sheet-id" ', " 'DB' ")
        assert config.spreadsheet_id == "sheet-id"
        assert config.sheet_name == "DB"

    def test_extracts_id_from_url(self):
        url = "https://docs.google.com/spreadsheets/d/1IbHBh5SACa505qLB6eNZEARwRofDme_p1NmyRCL7xPA/edit#gid=0"
        config = SheetConfig.create(url, "DB")
        assert config.spreadsheet_id == "1IbHBh5SACa505qLB6eNZEARwRofDme_p1NmyRCL7xPA"

    @pytest.mark.parametrize("spreadsheet_id,sheet_name", [
        ("", "DB"),
        (None, "DB"),
        ("   ", "DB"),
        ("sheet-id", ""),
        ("sheet-id", None),
        ("sheet-id", "  "),
    ])
    def test_missing_values_raise(self, spreadsheet_id, sheet_name):
        with pytest.raises(ConfigError) as exc_info:
            SheetConfig.create(spreadsheet_id, sheet_name)
        assert exc_info.value.code == ErrorCode.CONFIG_ERROR

    def test_url_without_id_raises(self):
        with pytest.raises(ConfigError):
            SheetConfig.create("https://example.com/", "DB")

    def test_to_dict(self):
        assert SheetConfig("id", "DB").to_dict() == {"spreadsheet_id": "id", "sheet_name": "DB"}

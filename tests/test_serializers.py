# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""Tests for the runtime serializers (reading text, results table)."""

import csv
import io
import json

import pytest

from labpicker import Illuminant, PickerSettings, RGBColor, capture_color, evaluate_captures, read_color
from labpicker.runtime import TableFormat, to_reading_text, to_results_table


@pytest.fixture
def readings():
    captures = [
        capture_color(RGBColor(0, 0, 0), capture_id=1, timestamp="t1"),
        capture_color(RGBColor(255, 0, 0), RGBColor(250, 5, 5), capture_id=2, timestamp="t2"),
    ]
    return evaluate_captures(captures, Illuminant.D65)


# ---------------------------------------------------------------------------
# to_reading_text
# ---------------------------------------------------------------------------

class TestReadingText:

    def test_black_without_standard(self):
        text = to_reading_text(read_color(RGBColor(0, 0, 0)))
        assert text.splitlines() == [
            "RGB: 0, 0, 0",
            "HEX: #000000",
            "L*a*b* (D65): 0.0, 0.0, 0.0",
            "ΔE2000: -",
        ]

    def test_delta_e_two_decimals(self):
        reading = read_color(RGBColor(255, 0, 0), standard=RGBColor(250, 5, 5))
        last = to_reading_text(reading).splitlines()[-1]
        assert last == f"ΔE2000: {reading.delta_e:.2f}"

    def test_names_illuminant(self):
        text = to_reading_text(read_color(RGBColor(9, 9, 9), PickerSettings(Illuminant.F2)))
        assert "(F2)" in text


# ---------------------------------------------------------------------------
# to_results_table
# ---------------------------------------------------------------------------

class TestResultsTable:

    def test_markdown_rows_newest_first(self, readings):
        lines = to_results_table(readings).splitlines()
        assert lines[0].startswith("| Sample | Standard | L* |")
        assert len(lines) == 4
        assert lines[2].startswith("| #FF0000 | #FA0505 |")
        assert lines[3] == "| #000000 | - | 0.0 | 0.0 | 0.0 | 0, 0, 0 | #000000 | - |"

    def test_markdown_formats_values(self, readings):
        row = to_results_table(readings).splitlines()[2]
        cells = [c.strip() for c in row.strip("|").split("|")]
        assert cells[2] == f"{readings[0].lab.L:.1f}"
        assert cells[5] == "255, 0, 0"
        assert cells[7] == f"{readings[0].delta_e:.2f}"

    def test_empty_markdown_has_header(self):
        lines = to_results_table([]).splitlines()
        assert len(lines) == 2

    def test_json_compact(self, readings):
        out = to_results_table(readings, format=TableFormat.JSON)
        assert "\n" not in out
        data = json.loads(out)
        assert data["illuminant"] == "D65"
        assert [c["id"] for c in data["captures"]] == [2, 1]
        assert data["captures"][1]["delta_e"] is None

    def test_json_pretty(self, readings):
        out = to_results_table(readings, format=TableFormat.JSON_PRETTY)
        assert "\n" in out
        assert json.loads(out)["captures"][0]["hex"] == "#FF0000"

    def test_json_empty(self):
        data = json.loads(to_results_table([], format=TableFormat.JSON))
        assert data == {"illuminant": None, "captures": []}

    def test_csv(self, readings):
        out = to_results_table(readings, format=TableFormat.CSV)
        rows = list(csv.reader(io.StringIO(out)))
        assert rows[0][0] == "Sample"
        assert rows[1][5] == "255, 0, 0"
        assert rows[2][1] == "-"
        assert len(rows) == 3

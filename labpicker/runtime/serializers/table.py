# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""
Reading and results-table serializers.

Formats ColorReading and CaptureReading values for display or export.
Readings are expected to be freshly evaluated under the current
illuminant (see labpicker.measure.extract.evaluate_captures).
"""

from __future__ import annotations

import csv
import io
import json
from typing import Iterable

from labpicker.runtime.serializers.base import (
    NO_VALUE,
    TableFormat,
    format_delta_e,
    format_lab_component,
)
from labpicker.schema import CaptureReading, ColorReading

COLUMNS = ("Sample", "Standard", "L*", "a*", "b*", "RGB", "HEX", "ΔE2000")


def to_reading_text(reading: ColorReading) -> str:
    """Serialize the current-sample readout.

    Example::

        RGB: 0, 0, 0
        HEX: #000000
        L*a*b* (D65): 0.0, 0.0, 0.0
        ΔE2000: -
    """
    r, g, b = reading.rgb.as_tuple()
    lab = reading.lab
    lines = [
        f"RGB: {r}, {g}, {b}",
        f"HEX: {reading.hex}",
        (
            f"L*a*b* ({lab.illuminant.value}): "
            f"{format_lab_component(lab.L)}, "
            f"{format_lab_component(lab.a)}, "
            f"{format_lab_component(lab.b)}"
        ),
        f"ΔE2000: {format_delta_e(reading.delta_e)}",
    ]
    return "\n".join(lines)


def to_results_table(
    readings: Iterable[CaptureReading],
    *,
    format: TableFormat = TableFormat.MARKDOWN,
) -> str:
    """Serialize evaluated captures as a results table.

    Args:
        readings: Captures evaluated under one illuminant, in display order.
        format: MARKDOWN, JSON, JSON_PRETTY or CSV.

    Returns:
        Formatted table string.

    Example (MARKDOWN)::

        | Sample | Standard | L* | a* | b* | RGB | HEX | ΔE2000 |
        |---|---|---|---|---|---|---|---|
        | #000000 | - | 0.0 | 0.0 | 0.0 | 0, 0, 0 | #000000 | - |
    """
    readings = tuple(readings)
    if format == TableFormat.MARKDOWN:
        return _to_markdown(readings)
    elif format == TableFormat.CSV:
        return _to_csv(readings)
    else:
        data = {
            "illuminant": readings[0].illuminant.value if readings else None,
            "captures": [r.to_dict() for r in readings],
        }
        if format == TableFormat.JSON_PRETTY:
            return json.dumps(data, indent=2, ensure_ascii=False)
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def _row(reading: CaptureReading) -> tuple[str, ...]:
    capture = reading.capture
    standard = capture.standard_rgb
    r, g, b = capture.rgb.as_tuple()
    return (
        capture.hex,
        standard.hex if standard is not None else NO_VALUE,
        format_lab_component(reading.lab.L),
        format_lab_component(reading.lab.a),
        format_lab_component(reading.lab.b),
        f"{r}, {g}, {b}",
        capture.hex,
        format_delta_e(reading.delta_e),
    )


def _to_markdown(readings: tuple[CaptureReading, ...]) -> str:
    """Generate Markdown table."""
    lines = [
        "| " + " | ".join(COLUMNS) + " |",
        "|" + "---|" * len(COLUMNS),
    ]
    for reading in readings:
        lines.append("| " + " | ".join(_row(reading)) + " |")
    return "\n".join(lines)


def _to_csv(readings: tuple[CaptureReading, ...]) -> str:
    """Generate CSV with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(COLUMNS)
    for reading in readings:
        writer.writerow(_row(reading))
    return buffer.getvalue()

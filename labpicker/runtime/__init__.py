# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""
Presentation runtime for Labpicker.

Turns readings into text a front end can show or export:

1. Reading text -- the readout for the current sample
2. Results table -- evaluated captures as Markdown, JSON or CSV

The presentation layer never modifies reading content.
"""

from labpicker.runtime.serializers import (
    TableFormat,
    to_reading_text,
    to_results_table,
)

__all__ = [
    "to_reading_text",
    "to_results_table",
    "TableFormat",
]

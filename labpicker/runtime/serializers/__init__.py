# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""
Serializers for readings and capture tables.

Serializers format values exactly as computed -- no recomputation.
"""

from labpicker.runtime.serializers.base import TableFormat
from labpicker.runtime.serializers.table import to_reading_text, to_results_table

__all__ = [
    "TableFormat",
    "to_reading_text",
    "to_results_table",
]

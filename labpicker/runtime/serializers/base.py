# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""Base types and utilities for serializers."""

from enum import Enum
from typing import Optional


class TableFormat(Enum):
    """Output format for serializers."""

    MARKDOWN = "markdown"
    JSON = "json"
    JSON_PRETTY = "json_pretty"
    CSV = "csv"


# Placeholder shown where no standard was selected
NO_VALUE = "-"


def format_lab_component(value: float) -> str:
    """L*, a*, b* are shown with one decimal, never as "-0.0"."""
    return f"{round(value, 1) + 0.0:.1f}"


def format_delta_e(value: Optional[float]) -> str:
    """ΔE is shown with two decimals, or a dash without a standard."""
    if value is None:
        return NO_VALUE
    return f"{value:.2f}"

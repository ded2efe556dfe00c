# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""Exceptions raised by the mapping and sampling layers."""


class LabPickerError(Exception):
    """Base class for all labpicker errors."""


class GeometryError(LabPickerError, ValueError):
    """
    Raised when image or container dimensions make letterbox fitting
    undefined (zero, negative or non-finite sizes).
    """


class SampleError(LabPickerError, ValueError):
    """
    Raised when a sample window is empty after clamping to the image, or
    when a pixel reader returns a buffer of the wrong size.
    """

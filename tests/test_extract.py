# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""Integration tests for the reading API (pick, read_color, captures)."""

import numpy as np
import pytest

from labpicker import (
    ArrayPixelReader,
    Capture,
    GeometryError,
    Illuminant,
    PickerSettings,
    RGBColor,
    SampleError,
    Standard,
    capture_color,
    delta_e_2000,
    evaluate_captures,
    pick,
    read_color,
    rgb_to_lab,
)
from labpicker.schema import PixelCoord, SampleWindow, Size


def _two_tone_image(rgb1, rgb2, height=90, width=160):
    """Create an image that is half one color (left), half another (right)."""
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, :width // 2] = rgb1
    img[:, width // 2:] = rgb2
    return img


class TestReadColor:

    def test_without_standard(self):
        reading = read_color(RGBColor(255, 255, 255))
        assert reading.delta_e is None
        assert reading.standard is None
        assert reading.hex == "#FFFFFF"
        assert reading.lab.L == pytest.approx(100.0, abs=0.1)
        assert reading.illuminant is Illuminant.D65

    def test_with_standard(self):
        sample = RGBColor(200, 40, 40)
        std = Standard(rgb=RGBColor(190, 50, 45), id=1, timestamp="t")
        settings = PickerSettings(illuminant=Illuminant.F2)
        reading = read_color(sample, settings, std)

        expected = delta_e_2000(
            rgb_to_lab(sample, Illuminant.F2), rgb_to_lab(std.rgb, Illuminant.F2)
        )
        assert reading.delta_e == pytest.approx(expected, abs=1e-12)
        assert reading.standard == std.rgb

    def test_standard_as_rgb(self):
        reading = read_color(RGBColor(10, 20, 30), standard=RGBColor(10, 20, 30))
        assert reading.delta_e == 0.0

    def test_illuminant_changes_reading(self):
        rgb = RGBColor(180, 160, 120)
        d65 = read_color(rgb, PickerSettings(Illuminant.D65))
        a = read_color(rgb, PickerSettings(Illuminant.A))
        assert d65.lab != a.lab
        assert a.lab.illuminant is Illuminant.A


class TestPick:

    @pytest.fixture
    def image(self):
        return ArrayPixelReader(_two_tone_image([255, 0, 0], [0, 0, 255]))

    def test_left_half_is_red(self, image):
        # 160x90 in an 800x800 container: rendered 800x450, offset_y 175
        reading = pick(image, (100, 400), image.size, (800, 800))
        assert reading.rgb == RGBColor(255, 0, 0)
        assert reading.source_pixel == PixelCoord(20, 45)
        assert reading.window == SampleWindow(18, 43, 5, 5)

    def test_right_half_is_blue(self, image):
        reading = pick(image, (700, 400), image.size, (800, 800))
        assert reading.rgb == RGBColor(0, 0, 255)

    def test_letterbox_band_clamps(self, image):
        reading = pick(image, (100, 5), image.size, (800, 800))
        assert reading.source_pixel == PixelCoord(20, 0)
        assert reading.window == SampleWindow(18, 0, 5, 3)

    def test_boundary_window_blends(self, image):
        # Pixel 80 is the first blue column; a 3-wide window spans 79..81
        reading = pick(image, (400, 400), image.size, (800, 800), PickerSettings(sample_size=3))
        assert reading.source_pixel == PixelCoord(80, 45)
        assert reading.rgb == RGBColor(85, 0, 170)

    def test_with_standard(self, image):
        std = Standard(rgb=RGBColor(250, 5, 5), id=7, timestamp="t")
        reading = pick(image, (100, 400), image.size, (800, 800), standard=std)
        assert reading.delta_e is not None
        assert 0.0 < reading.delta_e < 5.0

    def test_zero_container_raises(self, image):
        with pytest.raises(GeometryError):
            pick(image, (0, 0), image.size, (0, 800))

    def test_reader_mismatch_raises(self, image):
        def short_reader(x, y, w, h):
            return b"\x00" * 4

        with pytest.raises(SampleError):
            pick(short_reader, (100, 400), image.size, (800, 800))

    def test_reading_serializes(self, image):
        d = pick(image, (100, 400), image.size, (800, 800)).to_dict()
        assert d["hex"] == "#FF0000"
        assert d["source_pixel"] == {"x": 20, "y": 45}
        assert d["window"] == {"x": 18, "y": 43, "width": 5, "height": 5}
        assert d["lab"]["illuminant"] == "D65"


class TestCaptures:

    def test_capture_stores_rgb_only(self):
        std = Standard(rgb=RGBColor(1, 2, 3), id=1, timestamp="t")
        cap = capture_color(RGBColor(4, 5, 6), std, capture_id=99, timestamp="now")
        assert cap == Capture(rgb=RGBColor(4, 5, 6), standard_rgb=RGBColor(1, 2, 3), id=99, timestamp="now")

    def test_capture_defaults(self):
        cap = capture_color(RGBColor(4, 5, 6))
        assert cap.standard_rgb is None
        assert cap.id > 0
        assert cap.timestamp

    def test_evaluate_newest_first(self):
        caps = [
            capture_color(RGBColor(10, 10, 10), capture_id=1),
            capture_color(RGBColor(20, 20, 20), capture_id=2),
            capture_color(RGBColor(30, 30, 30), capture_id=3),
        ]
        readings = evaluate_captures(caps, Illuminant.D65)
        assert [r.capture.id for r in readings] == [3, 2, 1]

    def test_evaluate_recomputes_under_current_illuminant(self):
        std = RGBColor(120, 140, 90)
        cap = capture_color(RGBColor(130, 135, 95), std, capture_id=1)

        for illuminant in Illuminant:
            (reading,) = evaluate_captures([cap], illuminant)
            assert reading.lab == rgb_to_lab(cap.rgb, illuminant)
            assert reading.delta_e == pytest.approx(
                delta_e_2000(rgb_to_lab(cap.rgb, illuminant), rgb_to_lab(std, illuminant)),
                abs=1e-12,
            )

    def test_delta_e_depends_on_illuminant(self):
        cap = capture_color(RGBColor(200, 180, 60), RGBColor(190, 185, 80), capture_id=1)
        (d65,) = evaluate_captures([cap], Illuminant.D65)
        (a,) = evaluate_captures([cap], Illuminant.A)
        assert d65.delta_e != pytest.approx(a.delta_e, abs=1e-6)

    def test_no_standard_no_delta_e(self):
        (reading,) = evaluate_captures([capture_color(RGBColor(1, 1, 1), capture_id=1)], Illuminant.D65)
        assert reading.delta_e is None

    def test_legacy_stored_values_ignored(self):
        stored = {
            "id": 5,
            "r": 255, "g": 0, "b": 0,
            "l": "1.0", "a": "2.0", "b_lab": "3.0",
            "hex": "#FF0000",
            "deltaE": "99.99",
            "standardUsedRgb": {"r": 0, "g": 255, "b": 0},
            "timestamp": "yesterday",
        }
        (reading,) = evaluate_captures([Capture.from_dict(stored)], Illuminant.D65)
        assert reading.lab.L == pytest.approx(53.24, abs=0.1)
        assert reading.delta_e != pytest.approx(99.99)

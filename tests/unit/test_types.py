"""
Unit tests for request/render dataclasses
"""

import pytest
import os
import sys
from pathlib import Path

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(project_root)

from common.types import WHITE, RenderParams, parse_rgba


class TestParseRgba:
    def test_rgb_gets_opaque_alpha(self):
        assert parse_rgba([255, 0, 0]) == (255, 0, 0, 255)

    def test_rgba_kept(self):
        assert parse_rgba((10, 20, 30, 40)) == (10, 20, 30, 40)

    @pytest.mark.parametrize("value", [[1, 2], [1, 2, 3, 4, 5], [0, 0, 256], [-1, 0, 0]])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="fill must be"):
            parse_rgba(value)


class TestRenderParamsFromConfig:
    def test_fill_read_from_config(self):
        params = RenderParams.from_config({
            "source_image": "a.png",
            "font_file": "f.ttf",
            "fill": [255, 200, 0],
        })
        assert params.fill == (255, 200, 0, 255)
        assert params.source_image == Path("a.png")

    def test_defaults(self):
        params = RenderParams.from_config({"source_image": "a.png", "font_file": "f.ttf"})
        assert params.fill == WHITE
        assert params.font_size == 144.0
        assert params.y_offset == 345

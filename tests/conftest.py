"""
Shared fixtures: a synthetic 800x600 source image and the bundled font.
"""

import os
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(project_root)

from common.types import RenderParams
from common.utils import parse_iso8601

FONT_PATH = Path(project_root) / "assets" / "fonts" / "SourceCodePro-Regular.ttf"
SOURCE_SIZE = (800, 600)
SOURCE_COLOR = (20, 30, 60)
FIXED_NOW = parse_iso8601("2020-01-11T00:00:00Z")


@pytest.fixture
def source_png(tmp_path):
    """Solid-colour 800x600 PNG written to a temp dir."""
    path = tmp_path / "base.png"
    Image.new("RGB", SOURCE_SIZE, color=SOURCE_COLOR).save(path, format="PNG")
    return path


@pytest.fixture
def render_params(source_png):
    return RenderParams(source_image=source_png, font_file=FONT_PATH, font_size=144, y_offset=345)


@pytest.fixture
def render_cfg(source_png):
    """Config dict in the shape of config/params.yaml."""
    return {
        "render": {
            "source_image": str(source_png),
            "font_file": str(FONT_PATH),
            "font_size": 144,
            "y_offset": 345,
        },
        "server": {"default_port": 8080},
    }

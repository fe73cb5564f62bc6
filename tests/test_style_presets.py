"""描画スタイル設定のテスト"""

import numpy as np
import pytest
from imagesketcher import config
from imagesketcher.config import STYLE_PRESETS, PaintStyle
from imagesketcher.rendering.canvas import RecordingCanvas
from imagesketcher.sketcher import Sketcher

REQUIRED_KEYS = {
    'draw_weight',
    'draw_alpha',
    'drop_rate',
    'drop_alpha',
    'drop_max_size',
    'max_speed',
    'dampening_factor',
}


def test_every_style_has_preset():
    for style in PaintStyle:
        assert style in STYLE_PRESETS, f"{style} has no preset"
        assert set(STYLE_PRESETS[style]) == REQUIRED_KEYS


def test_ink_matches_module_defaults():
    """INK は標準値そのもの"""
    ink = STYLE_PRESETS[PaintStyle.INK]
    assert ink['draw_weight'] == config.DRAW_WEIGHT
    assert ink['draw_alpha'] == config.DRAW_ALPHA
    assert ink['drop_rate'] == config.DROP_RATE
    assert ink['max_speed'] == config.MAX_SPEED
    assert ink['dampening_factor'] == config.DAMPENING_FACTOR


def test_pen_never_drops():
    assert STYLE_PRESETS[PaintStyle.PEN]['drop_rate'] == 0.0


def test_wash_is_broader_and_fainter_than_ink():
    wash = STYLE_PRESETS[PaintStyle.WASH]
    ink = STYLE_PRESETS[PaintStyle.INK]
    assert wash['draw_weight'] > ink['draw_weight']
    assert wash['draw_alpha'] < ink['draw_alpha']


@pytest.mark.parametrize("style", list(PaintStyle))
def test_every_preset_runs(style):
    """全スタイルで検証を通り、フレームを回せる"""
    sketcher = Sketcher(np.zeros((30, 30, 3), dtype=np.uint8), style=style,
                        particle_count=5, seed=0)
    sketcher.setup()
    sketcher.tick(RecordingCanvas())
    assert sketcher.particles[0].draw_weight == STYLE_PRESETS[style]['draw_weight']

"""色計算ユーティリティのテスト"""

import numpy as np
import pytest
from imagesketcher.rendering.color import blend, brightness, lighten, similarity, to_rgba


def test_to_rgba_adds_opaque_alpha():
    assert to_rgba((1, 2, 3)) == (1, 2, 3, 255)


def test_to_rgba_rounds_and_clamps():
    assert to_rgba((1.4, 2.6, -3, 999)) == (1, 3, 0, 255)


@pytest.mark.parametrize("color", [(1, 2), (1, 2, 3, 4, 5), ()])
def test_to_rgba_invalid_length(color):
    with pytest.raises(ValueError):
        to_rgba(color)


def test_brightness_is_max_channel():
    assert brightness((0, 0, 0)) == 0.0
    assert brightness((255, 0, 0)) == 100.0
    assert abs(brightness((51, 10, 20)) - 20.0) < 1e-9


def test_similarity():
    assert similarity((10, 20, 30), (10, 20, 30)) == 1.0
    assert similarity((0, 0, 0), (255, 255, 255)) == 0.0
    assert abs(similarity((0, 0, 0), (51, 0, 0)) - 0.8) < 1e-9


def test_similarity_per_pixel():
    """画素配列を渡すと画素ごとの類似度を返す（アルファは無視）"""
    pixels = np.array([[[0, 0, 0, 255], [255, 255, 255, 0]],
                       [[51, 0, 0, 255], [0, 0, 0, 0]]], dtype=np.uint8)
    result = similarity(pixels, np.array([0.0, 0.0, 0.0, 50.0]))
    assert result.shape == (2, 2)
    assert np.allclose(result, [[1.0, 0.0], [0.8, 1.0]])


def test_lighten_saturates_and_keeps_alpha():
    assert lighten((10, 240, 100, 7), 50) == (60, 255, 150, 7)


def test_blend_keeps_alpha():
    current = np.array([0.0, 100.0, 200.0, 42.0])
    result = blend(current, (100, 100, 0), 0.25)
    assert np.allclose(result, [25.0, 100.0, 150.0, 42.0])
    assert np.allclose(current, [0.0, 100.0, 200.0, 42.0]), "input must not be modified"

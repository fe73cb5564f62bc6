"""パーリンノイズのテスト"""

import numpy as np
import pytest
from imagesketcher.physics.noise import PerlinNoise


def test_deterministic_for_seed():
    """同じシード・同じ入力なら常に同じ値"""
    a = PerlinNoise(seed=42)
    b = PerlinNoise(seed=42)
    for x, y, z in [(0.1, 0.2, 0.3), (5.5, 1.25, 0.0), (100.7, 33.3, 2.2)]:
        assert a(x, y, z) == b(x, y, z)


def test_seeds_differ():
    a = PerlinNoise(seed=1)
    b = PerlinNoise(seed=2)
    points = [(x * 0.37, x * 0.11, 0.5) for x in range(50)]
    assert any(a(*p) != b(*p) for p in points)


def test_output_range():
    noise = PerlinNoise(seed=0)
    rng = np.random.default_rng(0)
    for x, y, z in rng.uniform(-50, 50, size=(500, 3)):
        value = noise(x, y, z)
        assert 0.0 <= value <= 1.0, f"noise({x}, {y}, {z}) = {value}"


def test_lattice_points_are_mid_value():
    """1オクターブでは整数格子点で 0.5（勾配との内積が0）"""
    noise = PerlinNoise(seed=3, octaves=1)
    assert noise(2.0, 5.0, 7.0) == 0.5
    assert noise(0.0, 0.0, 0.0) == 0.5


def test_continuity():
    """入力が少し変わっても出力は少ししか変わらない"""
    noise = PerlinNoise(seed=5)
    for x in np.linspace(0, 10, 50):
        assert abs(noise(x, 1.3, 0.7) - noise(x + 1e-4, 1.3, 0.7)) < 1e-2


def test_optional_dimensions():
    noise = PerlinNoise(seed=9)
    assert noise(1.5) == noise(1.5, 0.0, 0.0)
    assert noise(1.5, 2.5) == noise(1.5, 2.5, 0.0)


@pytest.mark.parametrize("kwargs", [{'octaves': 0}, {'falloff': 0.0}, {'falloff': 1.5}])
def test_invalid_parameters(kwargs):
    with pytest.raises(ValueError):
        PerlinNoise(**kwargs)

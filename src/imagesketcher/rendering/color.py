"""色計算ユーティリティ"""

import numpy as np

Color = tuple[int, int, int, int]


def to_rgba(color) -> Color:
    """
    任意の色表現を (r, g, b, a) の整数タプルに変換

    3要素なら不透明 (a=255) とみなす。各チャンネルは 0-255 に丸め・クランプ。

    Raises:
        ValueError: 要素数が3または4でない場合
    """
    values = [float(c) for c in color]
    if len(values) == 3:
        values.append(255.0)
    elif len(values) != 4:
        raise ValueError(f"color must have 3 or 4 channels, got {len(values)}")
    return tuple(int(min(max(round(v), 0), 255)) for v in values)


def brightness(color) -> float:
    """明度（HSBのB、最大チャンネル）を 0-100 で返す"""
    return max(float(color[0]), float(color[1]), float(color[2])) / 255.0 * 100.0


def similarity(a, b):
    """
    2色の近さ (0-1)

    RGB各チャンネルの差の最大値で測る。同色で1、白と黒で0。
    a に (..., 3|4) の画素配列を渡すと画素ごとの類似度配列を返す。
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    diff = np.abs(a[..., :3] - b[..., :3]).max(axis=-1)
    result = 1.0 - diff / 255.0
    return float(result) if result.ndim == 0 else result


def lighten(color, delta: int) -> Color:
    """RGBを delta だけ明るくする（255でクランプ、アルファは維持）"""
    r, g, b, a = to_rgba(color)
    return (min(r + delta, 255), min(g + delta, 255), min(b + delta, 255), a)


def blend(current: np.ndarray, target, rate: float) -> np.ndarray:
    """
    RGBを target へ指数的に近づける（アルファは current のまま）

    current ← (1 - rate)·current + rate·target
    """
    result = current.astype(float).copy()
    result[:3] = (1.0 - rate) * result[:3] + rate * np.asarray(target[:3], dtype=float)
    return result

"""ベクトル計算の共通ユーティリティ"""
import numpy as np


def zero_vector() -> np.ndarray:
    """ゼロベクトル [0, 0] を返す"""
    return np.array([0.0, 0.0])


def normalize(vector: np.ndarray) -> np.ndarray:
    """
    単位ベクトルに正規化

    長さゼロ（またはNaN/Inf）の場合はゼロベクトルを返す。
    """
    magnitude = np.linalg.norm(vector)
    if magnitude < 1e-12 or not np.isfinite(magnitude):
        return zero_vector()
    return vector / magnitude


def clamp_magnitude(vector: np.ndarray, max_magnitude: float) -> np.ndarray:
    """
    ベクトルの大きさをクランプし、NaN/Infをゼロに置換

    速度上限の安全ガード。方向は保持し、大きさだけを max_magnitude に揃える。
    戻り値の大きさは浮動小数点でも必ず max_magnitude 以下。

    Args:
        vector: ベクトル [x, y]
        max_magnitude: 最大マグニチュード

    Returns:
        クランプ後のベクトル
    """
    if not np.all(np.isfinite(vector)):
        return zero_vector()

    magnitude = np.linalg.norm(vector)
    if magnitude <= max_magnitude:
        return vector

    clamped = normalize(vector) * max_magnitude
    # 丸め誤差で上限を1ulp超えることがあるので、収まるまで0へ寄せる
    while np.linalg.norm(clamped) > max_magnitude:
        clamped = np.nextafter(clamped, 0.0)
    return clamped


def from_angle(angle_rad: float, length: float = 1.0) -> np.ndarray:
    """
    角度と長さからベクトルを生成

    Args:
        angle_rad: x軸からの角度 (ラジアン)
        length: ベクトルの長さ

    Returns:
        [length·cos, length·sin]
    """
    return np.array([np.cos(angle_rad) * length, np.sin(angle_rad) * length])

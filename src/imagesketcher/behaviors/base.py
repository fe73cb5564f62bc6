"""ビヘイビア基底クラス"""

from abc import ABC, abstractmethod
import numpy as np


class Behavior(ABC):
    """
    パーティクルに作用する合成可能なルール

    2段階の契約:
        update(sketcher): 1フレームに1回、ビヘイビア自身の状態を更新
        apply_to_particle(particle): 1ステップ・1パーティクルごとに作用

    パラメータの検証はコンストラクタで行い、この2メソッドは例外を投げない。
    """

    name = "behavior"

    @abstractmethod
    def update(self, sketcher):
        """フレーム前処理（時間オフセットの進行・補助テーブルの掃除など）"""

    @abstractmethod
    def apply_to_particle(self, particle):
        """パーティクルに力・色・死亡判定を適用"""

    def __repr__(self):
        return f"{type(self).__name__}()"


def parse_kernel_size(kernel_size) -> tuple[int, int]:
    """
    カーネルサイズ引数を (幅, 高さ) に正規化

    Args:
        kernel_size: 正の整数、または正の整数2要素のタプル/リスト

    Raises:
        TypeError: 数値でも2要素シーケンスでもない
        ValueError: 正でない値
    """
    if isinstance(kernel_size, (int, np.integer)) and not isinstance(kernel_size, bool):
        width = height = int(kernel_size)
    elif isinstance(kernel_size, (tuple, list)) and len(kernel_size) == 2:
        width, height = kernel_size
        for value in (width, height):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise TypeError(f"kernel_size entries must be ints, got {kernel_size!r}")
        width, height = int(width), int(height)
    else:
        raise TypeError(
            f"kernel_size must be an int or a sequence of two ints, got {kernel_size!r}"
        )

    if width <= 0 or height <= 0:
        raise ValueError(f"kernel_size must be positive, got {kernel_size!r}")
    return width, height


def check_number(name: str, value, minimum: float = None, maximum: float = None,
                 allow_minimum: bool = True) -> float:
    """
    数値パラメータを検証して float で返す

    Raises:
        TypeError: 数値でない
        ValueError: 範囲外
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}")
    value = float(value)
    if not np.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    if minimum is not None:
        if value < minimum or (not allow_minimum and value == minimum):
            bound = ">=" if allow_minimum else ">"
            raise ValueError(f"{name} must be {bound} {minimum}, got {value}")
    if maximum is not None and value > maximum:
        raise ValueError(f"{name} must be <= {maximum}, got {value}")
    return value

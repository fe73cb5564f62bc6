"""スポーンジェネレーター: (sketcher) -> (position, color)"""

import logging
import numpy as np
from imagesketcher import config
from imagesketcher.rendering.color import brightness

logger = logging.getLogger(__name__)


def random_spawn(sketcher) -> tuple[np.ndarray, tuple]:
    """バッファ内の一様乱数位置に、その画素の色でスポーン"""
    buffer = sketcher.buffer
    position = sketcher.rng.uniform([0.0, 0.0], [buffer.width, buffer.height])
    return position, buffer.get(position[0], position[1])


def dark_pixel_spawn(threshold: float = config.DARK_PIXEL_THRESHOLD,
                     max_attempts: int = config.SPAWN_MAX_ATTEMPTS):
    """
    暗い画素（明度 < threshold %）の上にだけスポーンするジェネレーターを作る

    まだ描かれていない濃い部分から線が始まるので、描き進むほど
    （フェードで画素が明るくなるほど）スポーン位置が絞られていく。
    max_attempts 回で見つからなければ最後に引いた位置を使う。

    Raises:
        ValueError: threshold が 0-100 の範囲外、または max_attempts が1未満
    """
    if not 0.0 <= threshold <= 100.0:
        raise ValueError(f"threshold must be in [0, 100], got {threshold}")
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    def generate(sketcher) -> tuple[np.ndarray, tuple]:
        position, color = random_spawn(sketcher)
        for _ in range(max_attempts - 1):
            if brightness(color) < threshold:
                return position, color
            position, color = random_spawn(sketcher)
        if brightness(color) >= threshold:
            logger.debug("No dark pixel found in %d attempts, spawning at (%.1f, %.1f)",
                         max_attempts, position[0], position[1])
        return position, color

    return generate

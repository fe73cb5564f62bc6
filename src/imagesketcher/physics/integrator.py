"""数値積分器 (オイラー法)"""

import numpy as np
from imagesketcher.physics.utils import clamp_magnitude


def euler_integrate(
    position: np.ndarray,
    velocity: np.ndarray,
    force: np.ndarray,
    dampening_factor: float,
    max_speed: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    1ステップ分のオイラー積分（減衰・速度上限つき）

    注意: 力は「瞬間的な撃力」として速度へそのまま加算する。
    質量・時間刻みを持たない簡易モデルで、厳密な力積ではない。

    アルゴリズム:
        1. velocity += force
        2. velocity *= dampening_factor （毎ステップの指数減衰）
        3. |velocity| > max_speed なら max_speed に縮める（方向は保持）
        4. position += velocity

    Args:
        position: 現在位置 [x, y]
        velocity: 現在速度 [vx, vy]
        force: このステップで蓄積された力 [fx, fy]
        dampening_factor: 減衰係数 (0, 1]
        max_speed: 速度上限

    Returns:
        (new_position, new_velocity)
    """
    new_velocity = (velocity + force) * dampening_factor
    new_velocity = clamp_magnitude(new_velocity, max_speed)

    new_position = position + new_velocity

    return new_position, new_velocity
